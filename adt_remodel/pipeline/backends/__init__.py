"""
Code generation backends.

Template-based backends turning a Schema into source code.
"""

from __future__ import annotations

from .base import CodeBackend
from .csharp_backend import CSharpBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "cs": CSharpBackend,
}

__all__ = [
    "BACKENDS",
    "CodeBackend",
    "CSharpBackend",
]
