"""Last.fm API request signing."""

import hashlib
from typing import Dict, Iterable, Mapping, Tuple, Union

Params = Union[Mapping[str, object], Iterable[Tuple[str, object]]]


def sign_params(params: Params, secret: str) -> str:
    """Compute the ``api_sig`` for a set of request parameters.

    Parameter names are sorted by code point and each name is immediately
    followed by its value. The shared secret is appended and the MD5 digest of
    the UTF-8 encoded string is returned as lowercase hex.

    Args:
        params: Parameters to sign, as a mapping or (name, value) pairs
        secret: Last.fm shared secret

    Returns:
        32 character hexadecimal signature
    """
    pairs = params.items() if isinstance(params, Mapping) else params
    ordered = sorted(pairs, key=lambda pair: pair[0])
    payload = ''.join(f"{name}{value}" for name, value in ordered)
    payload += secret
    return hashlib.md5(payload.encode('utf-8')).hexdigest()


def signed(params: Mapping[str, object], secret: str) -> Dict[str, str]:
    """Return a copy of ``params`` with ``api_sig`` added.

    Values are converted to strings so the signed text matches what goes over
    the wire.
    """
    result = {name: str(value) for name, value in params.items()}
    result['api_sig'] = sign_params(result, secret)
    return result
