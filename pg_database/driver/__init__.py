from .protocol import Driver
from .params import (
    question_to_dollar,
    is_json,
    encode_json,
    prepare_values,
    to_text,
)
from .psycopg_driver import PsycopgDriver, PsycopgStatement

__all__ = (
    "Driver",
    "PsycopgDriver",
    "PsycopgStatement",
    "question_to_dollar",
    "is_json",
    "encode_json",
    "prepare_values",
    "to_text",
)
