from .engine import process_template, render, substitute
from .materializer import materialize

__all__ = ["materialize", "process_template", "render", "substitute"]
