"""Port-level exceptions for the pricing bounded context.

These exceptions represent failures of the rule store collaborator. They
are distinct from resolution outcomes, which are typed results.
"""


class RuleStoreUnavailableError(Exception):
    """Raised when the rule store cannot answer a query.

    Wraps driver or connection failures. The resolver does not retry; the
    caller decides whether to retry the whole (idempotent) resolution.
    """

    pass
