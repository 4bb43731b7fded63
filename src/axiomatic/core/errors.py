"""Custom exception hierarchy for the object runtime."""


class AxiomaticError(Exception):
    """Base exception for all runtime errors."""


class BootstrapError(AxiomaticError):
    """The class system was used in a way its current boot phase can't support."""


# --- Class construction ---
class ClassBuildError(AxiomaticError):
    """A Model could not be turned into a class."""


class InvalidAxiom(ClassBuildError):
    """An axiom defines neither install_in_class nor install_in_proto."""


class MissingIdentity(ClassBuildError):
    """A Model lacks a name or id and is not a refinement."""


# --- Axioms ---
class AxiomError(AxiomaticError):
    """An operation referred to an axiom it can't use."""


class UnknownAxiom(AxiomError):
    """No axiom of the expected kind exists under the given name."""

    def __init__(self, class_id: str, name: str, expected: str = "Property"):
        self.class_id = class_id
        self.name = name
        self.expected = expected
        super().__init__(f"{class_id} has no {expected} named {name!r}")


# --- Contexts ---
class ContextError(AxiomaticError):
    """Context registration or lookup failure."""


class DuplicateRegistration(ContextError):
    """The id is already registered in this context's own cache."""

    def __init__(self, class_id: str):
        self.class_id = class_id
        super().__init__(f"{class_id} is already registered in this context")


class UnresolvedReference(ContextError):
    """No class is registered under the id in the context chain."""

    def __init__(self, class_id: str):
        self.class_id = class_id
        super().__init__(f"Could not find any registered class for {class_id}")


# --- Slots ---
class BindingError(AxiomaticError):
    """Slot binding failure."""


class DivergentRelation(BindingError):
    """A bidirectional relation kept re-triggering past its feedback limit."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"relate_to: unexpected divergence after {depth} rounds")


# --- Debug / reflection ---
class ReflectionError(AxiomaticError):
    """A callable's signature or docstring could not be parsed."""


class ArgumentTypeError(AxiomaticError, TypeError):
    """A value failed a type-checked argument."""
