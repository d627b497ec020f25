"""Name conversions between JSON:API resource types and TypeSpec model names.

Resource types map to model names without singularization:
  users       -> Users
  blog_posts  -> BlogPosts
  blog-posts  -> BlogPosts

The reverse direction produces snake_case resource types:
  Users       -> users
  BlogPosts   -> blog_posts
"""

import re


def pascal_case(name: str) -> str:
    """Convert a resource type like 'blog_posts' into a model name like 'BlogPosts'."""
    words = [w for w in re.split(r"[-_\s]+", name) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def snake_case(name: str) -> str:
    """Convert a PascalCase or camelCase model name to a snake_case resource type."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def serializer_name(model_name: str) -> str:
    return f"{model_name}Serializer"
