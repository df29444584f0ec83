"""HTTP Basic authentication for outgoing requests."""

from requests import PreparedRequest
from requests.auth import HTTPBasicAuth


class BasicAuthFilter(HTTPBasicAuth):
    """Attach HTTP Basic credentials to a copy of any request.

    Install it as ``session.auth`` (or pass ``auth=``) and ``requests`` applies
    it right before the transport adapter sends the request. Transport errors
    are not handled here.
    """

    def filter(self, request: PreparedRequest) -> PreparedRequest:
        """Return a copy of ``request`` carrying the Basic auth header.

        The input request is left untouched; an existing ``Authorization``
        header on the copy is overwritten.
        """
        return super().__call__(request.copy())

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        return self.filter(request)

    def __repr__(self) -> str:
        return "BasicAuthFilter(username='***', password='***')"
