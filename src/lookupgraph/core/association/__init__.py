"""Association functionality: declaration models and naming conventions."""

from lookupgraph.core.association.models import Association, AssociationKind
from lookupgraph.core.association.operations import belongs_to, has, through

__all__ = [
    # Models
    "Association",
    "AssociationKind",
    # Operations
    "belongs_to",
    "has",
    "through",
]
