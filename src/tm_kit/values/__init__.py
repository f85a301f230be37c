from .literal import Literal
from .locator import Locator
from .qname import QName
from .ref import Ref, RefKind

__all__ = [
    "Literal",
    "Locator",
    "QName",
    "Ref",
    "RefKind",
]
