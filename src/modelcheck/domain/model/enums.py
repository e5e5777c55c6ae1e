"""Domain enumerations."""

from enum import Enum, auto


class Layer(Enum):
    """Architectural layer a class (or free-standing code) belongs to."""

    MODEL = "model"
    CONTROLLER = "controller"
    VIEW = "view"
    OTHER = "other"


class AssociationKind(Enum):
    """Kind of declared association between two classes."""

    OWNS_ONE = "owns-one"
    OWNS_MANY = "owns-many"
    BELONGS_TO = "belongs-to"
    COMPOSED_OF = "composed-of"


class ReceiverOrigin(Enum):
    """Where the receiver chain of a call site starts."""

    SELF = auto()  # self.a.b
    PARAMETER = auto()  # param.a.b (or template local)
    EXTERNAL = auto()  # Post.where(...), a known external call


class Severity(Enum):
    """Rule violation severity."""

    ERROR = auto()
    WARNING = auto()
    INFO = auto()


class Remediation(Enum):
    """Suggested remediation category attached to a violation."""

    WRAPPER_METHOD = "wrapper-method"
    DELEGATION = "delegation"
    EXTRACTED_COLLABORATOR = "extracted-collaborator"
    SCOPE_RELOCATION = "scope-relocation"
    CALLBACK_REMOVAL = "callback-removal"
