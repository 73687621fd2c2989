"""Repository interfaces for the remark domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from remark.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
