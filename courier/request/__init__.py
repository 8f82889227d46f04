"""Request descriptions: the immutable descriptor, the protocol, and the builder."""

from courier.request.composable import ComposableRequest
from courier.request.descriptor import RequestDescriptor
from courier.request.protocols import Requestable


__all__ = [
    "ComposableRequest",
    "RequestDescriptor",
    "Requestable",
]
