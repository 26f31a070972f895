"""Domain exceptions for the pricing bounded context.

Resolution outcomes (no rule set, no matching candidate) are typed
results, not exceptions. Exceptions here cover malformed input only.
"""


class InvalidContextError(ValueError):
    """Raised when a resolution request is malformed.

    Examples are a non-positive or non-finite quantity. The presentation
    layer maps this to a client error; it never reaches the resolver.
    """

    pass
