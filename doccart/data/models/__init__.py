#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from doccart.data.models.document import DocumentModel
from doccart.data.models.cart_session import CartSessionModel
from doccart.data.models.cart_item import CartItemModel
from doccart.data.models.submission import SubmissionModel, SubmissionItemModel

__all__ = [
    "DocumentModel",
    "CartSessionModel",
    "CartItemModel",
    "SubmissionModel",
    "SubmissionItemModel",
]
