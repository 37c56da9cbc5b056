# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Declarative path-rule binding of XML onto Python objects."""

from .engine import READ_CHUNK_SIZE, Binder, bind, split_tag
from .rules import (
    CallMethod,
    CaptureMarkup,
    ObjectCreate,
    Rule,
    RuleTable,
    SetAttributeProperty,
    SetNext,
    SetProperty,
    SoftFieldError,
)

__all__ = [
    "READ_CHUNK_SIZE",
    "Binder",
    "bind",
    "split_tag",
    "CallMethod",
    "CaptureMarkup",
    "ObjectCreate",
    "Rule",
    "RuleTable",
    "SetAttributeProperty",
    "SetNext",
    "SetProperty",
    "SoftFieldError",
]
