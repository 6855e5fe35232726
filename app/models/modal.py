import enum
from dataclasses import dataclass
from typing import Union

from app.models.product import Product


class ModalMode(str, enum.Enum):
    """Enum for the modal currently shown on the page."""
    IDLE = "idle"
    CREATING = "creating"
    EDITING = "editing"
    CONFIRMING_DELETE = "confirming_delete"


@dataclass(frozen=True)
class Idle:
    mode = ModalMode.IDLE


@dataclass(frozen=True)
class Creating:
    """Blank create form open."""
    mode = ModalMode.CREATING


@dataclass(frozen=True)
class Editing:
    """Edit form open for `product`."""
    product: Product
    mode = ModalMode.EDITING


@dataclass(frozen=True)
class ConfirmingDelete:
    """Delete confirmation open for the candidate `product`."""
    product: Product
    mode = ModalMode.CONFIRMING_DELETE


ModalState = Union[Idle, Creating, Editing, ConfirmingDelete]
