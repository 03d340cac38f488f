from ._body import default_content_type, encode_body
from ._errors import handle_decode_errors, handle_transport_errors
from ._url import append_query_param, join_path, parse_absolute_url
from ._user_agent import user_agent_value

__all__ = [
    "append_query_param",
    "default_content_type",
    "encode_body",
    "handle_decode_errors",
    "handle_transport_errors",
    "join_path",
    "parse_absolute_url",
    "user_agent_value",
]
