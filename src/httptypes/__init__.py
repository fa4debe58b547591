"""httptypes: HTTP request/response exchanges in the HTTP Types JSON format.

All public types are exported from this module for flat imports:

    from httptypes import HttpExchangeReader, HttpExchangeWriter, HttpRequest
"""

import logging

__version__ = "0.1.0"

# Errors
from httptypes._errors import HttpTypesError, JsonParseError, ValidationError

# Multi-value maps
from httptypes._multimap import HttpHeaders, HttpQuery, MultiValueMap

# Reading
from httptypes._reader import HttpExchangeReader, parse_exchange

# Models
from httptypes._request import HttpRequest, encode_query, join_path, split_path
from httptypes._response import HttpExchange, HttpResponse
from httptypes._types import HttpMethod, HttpProtocol

# Writing
from httptypes._writer import HttpExchangeWriter, exchange_to_dict, to_json

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Enumerations
    "HttpMethod",
    "HttpProtocol",
    # Multi-value maps
    "MultiValueMap",
    "HttpHeaders",
    "HttpQuery",
    # Models
    "HttpRequest",
    "HttpResponse",
    "HttpExchange",
    # Path helpers
    "split_path",
    "join_path",
    "encode_query",
    # Reading
    "HttpExchangeReader",
    "parse_exchange",
    # Writing
    "HttpExchangeWriter",
    "exchange_to_dict",
    "to_json",
    # Errors
    "HttpTypesError",
    "JsonParseError",
    "ValidationError",
]
