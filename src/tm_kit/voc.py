# src/tm_kit/voc.py

"""Vocabulary constants.

Use these constants instead of hardcoded IRIs.
"""

# ============================================================================
# XML Schema datatypes
# ============================================================================


class XSD:
    _BASE = "http://www.w3.org/2001/XMLSchema#"

    STRING = _BASE + "string"
    ANY_URI = _BASE + "anyURI"
    INTEGER = _BASE + "integer"
    DECIMAL = _BASE + "decimal"
    DATE = _BASE + "date"
    DATE_TIME = _BASE + "dateTime"
    G_YEAR_MONTH = _BASE + "gYearMonth"
    G_YEAR = _BASE + "gYear"
    BOOLEAN = _BASE + "boolean"
    FLOAT = _BASE + "float"
    DOUBLE = _BASE + "double"


# ============================================================================
# Topic Maps Data Model PSIs
# ============================================================================


class TMDM:
    _BASE = "http://psi.topicmaps.org/iso13250/model/"

    SUBJECT = _BASE + "subject"
    TYPE_INSTANCE = _BASE + "type-instance"
    TYPE = _BASE + "type"
    INSTANCE = _BASE + "instance"
    SUPERTYPE_SUBTYPE = _BASE + "supertype-subtype"
    SUPERTYPE = _BASE + "supertype"
    SUBTYPE = _BASE + "subtype"
    TOPIC_NAME = _BASE + "topic-name"
    SORT = _BASE + "sort"


# ============================================================================
# XTM 1.0 PSIs
# ============================================================================


class XTM10:
    _BASE = "http://www.topicmaps.org/xtm/1.0/core.xtm#"

    DISPLAY = _BASE + "display"
    SORT = _BASE + "sort"
    ROLE = _BASE + "role"


# ============================================================================
# Deserializer properties
# ============================================================================


class Property:
    """Keys for the deserializer property bag."""

    _BASE = "http://psi.semagia.com/mio/property/"

    # Validate the syntax of the source if set to True
    VALIDATE = _BASE + "validate"

    # Skip directives which merge in another map (#MERGEMAP in LTM)
    IGNORE_MERGEMAP = _BASE + "ignore-mergemap"

    # Skip directives which include another map (#INCLUDE in LTM)
    IGNORE_INCLUDE = _BASE + "ignore-include"

    # LTM deserializer acts in legacy (XTM 1.0) mode if set to True
    LTM_LEGACY = _BASE + "ltm-legacy"

    # A PrefixListener notified about LTM prefix and base IRI declarations
    LTM_PREFIX_LISTENER = _BASE + "ltm/prefix-listener"
