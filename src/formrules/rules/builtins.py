"""Built-in validation rules.

Every rule is a pure ``(test, message)`` pair. Parameterised rules receive
their arguments as the list of strings parsed from ``name:arg1,arg2``.

Categories:
- Presence: required, nullable
- Character class: alphabets*, numbers*, specialCharacters*
- Comparison: string*, number*, files*
- Cross-field: exact, different
- Format: email, url, phone, money, name, noSequence
- Date: date, dateAfter, dateBefore, dateBetween, dateExact, dateFormat
- Type: boolean, array, true, false, file, files
- Membership: arrayContains, arrayDoesntContain
"""

import re
from datetime import date, datetime
from typing import Any

from formrules.errors import MissingSiblingFieldError
from formrules.rules.coercion import as_date, as_number, as_text, count, is_file, is_file_list
from formrules.types import Rule


# =============================================================================
# Patterns
# =============================================================================

# Character classes ("only" variants must match the whole value)
ALPHABETS_PATTERN = re.compile(r"[a-z A-Z]")
ALPHABETS_ONLY_PATTERN = re.compile(r"[a-z A-Z]+")
LOWERCASE_PATTERN = re.compile(r"[a-z]")
LOWERCASE_ONLY_PATTERN = re.compile(r"[a-z]+")
UPPERCASE_PATTERN = re.compile(r"[A-Z]")
UPPERCASE_ONLY_PATTERN = re.compile(r"[A-Z]+")
NUMBERS_PATTERN = re.compile(r"[0-9]")
NUMBERS_ONLY_PATTERN = re.compile(r"[0-9]+")
SPECIAL_CHARACTERS_PATTERN = re.compile(r"[!@#$%^&*()_+~`{}\[\]\\;:'\"<>,.?/]+")
SPECIAL_CHARACTERS_ONLY_PATTERN = SPECIAL_CHARACTERS_PATTERN

EMAIL_PATTERN = re.compile(
    r"(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))"
)

# Found anywhere in the value (not anchored)
URL_PATTERN = re.compile(
    r"[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)

# Nigerian mobile numbers: +234/234/0 prefix, 7/8/9 network, 0/1, eight digits
PHONE_PATTERN = re.compile(r"(\+|)(234|0)(7|8|9)(0|1)[0-9]{8}")

MONEY_PATTERN = re.compile(r"[0-9]+(\.[0-9]{1,2})?")

# At least two word tokens of two or more characters
NAME_PATTERN = re.compile(r"\w{2}(\s\w{2})+")

# Literal substrings a value must not contain
SEQUENCES = ("abc", "123")
SEQUENCE_PATTERN = re.compile("|".join(re.escape(s) for s in SEQUENCES))


def _arg(args: list[str], index: int) -> str:
    return args[index] if len(args) > index else ""


def _constant(text: str):
    def message(field: Any, args: list[str], form: Any) -> str:
        return text

    return message


def _searches(pattern: re.Pattern):
    def test(field: Any, args: list[str], form: Any) -> bool:
        text = as_text(field.value)
        return text is not None and pattern.search(text) is not None

    return test


def _matches_whole(pattern: re.Pattern):
    def test(field: Any, args: list[str], form: Any) -> bool:
        text = as_text(field.value)
        return text is not None and pattern.fullmatch(text) is not None

    return test


# -----------------------------------------------------------------------------
# Presence Rules
# -----------------------------------------------------------------------------


def _required(field, args, form) -> bool:
    return bool(field.value)


def _nullable(field, args, form) -> bool:
    return True


def _presence_rules() -> list[Rule]:
    return [
        Rule(_required, _constant("this field is required."), "required"),
        Rule(_nullable, _constant(""), "nullable"),
    ]


# -----------------------------------------------------------------------------
# Character Class Rules
# -----------------------------------------------------------------------------


def _character_rules() -> list[Rule]:
    return [
        Rule(
            _searches(ALPHABETS_PATTERN),
            _constant("this field must contain letters."),
            "alphabets",
        ),
        Rule(
            _matches_whole(ALPHABETS_ONLY_PATTERN),
            _constant("this field must contain only letters."),
            "alphabetsOnly",
        ),
        Rule(
            _searches(LOWERCASE_PATTERN),
            _constant("this field must contain lowercase letters."),
            "alphabetsLowercase",
        ),
        Rule(
            _matches_whole(LOWERCASE_ONLY_PATTERN),
            _constant("this field must contain only lowercase letters."),
            "alphabetsLowercaseOnly",
        ),
        Rule(
            _searches(UPPERCASE_PATTERN),
            _constant("this field must contain uppercase letters."),
            "alphabetsUppercase",
        ),
        Rule(
            _matches_whole(UPPERCASE_ONLY_PATTERN),
            _constant("this field must contain only uppercase letters."),
            "alphabetsUppercaseOnly",
        ),
        Rule(
            _searches(NUMBERS_PATTERN),
            _constant("this field must contain numbers."),
            "numbers",
        ),
        Rule(
            _matches_whole(NUMBERS_ONLY_PATTERN),
            _constant("this field must contain only numbers."),
            "numbersOnly",
        ),
        Rule(
            _searches(SPECIAL_CHARACTERS_PATTERN),
            _constant("this field must contain punctuations."),
            "specialCharacters",
        ),
        Rule(
            _matches_whole(SPECIAL_CHARACTERS_ONLY_PATTERN),
            _constant("this field must contain only punctuations."),
            "specialCharactersOnly",
        ),
    ]


# -----------------------------------------------------------------------------
# Comparison Rules
# -----------------------------------------------------------------------------


def _text_length(value: Any) -> int:
    text = as_text(value)
    return len(text) if text is not None else 0


def _string_length(field, args, form) -> bool:
    text = as_text(field.value)
    return text is not None and len(text) == as_number(_arg(args, 0))


def _string_max(field, args, form) -> bool:
    return _text_length(field.value) <= as_number(_arg(args, 0))


def _string_min(field, args, form) -> bool:
    return _text_length(field.value) >= as_number(_arg(args, 0))


def _number_min(field, args, form) -> bool:
    return as_number(field.value) >= as_number(_arg(args, 0))


def _number_max(field, args, form) -> bool:
    return as_number(field.value) <= as_number(_arg(args, 0))


def _number_exact(field, args, form) -> bool:
    return as_number(field.value) == as_number(_arg(args, 0))


def _number_between(field, args, form) -> bool:
    """Inclusive on both bounds."""
    value = as_number(field.value)
    return as_number(_arg(args, 0)) <= value <= as_number(_arg(args, 1))


def _files_length(field, args, form) -> bool:
    size = count(field.value)
    return size is not None and size == as_number(_arg(args, 0))


def _files_min(field, args, form) -> bool:
    size = count(field.value)
    return size is not None and size >= as_number(_arg(args, 0))


def _files_max(field, args, form) -> bool:
    size = count(field.value)
    return size is not None and size <= as_number(_arg(args, 0))


def _comparison_rules() -> list[Rule]:
    return [
        Rule(
            _string_length,
            lambda field, args, form: f"this field has to be exactly {_arg(args, 0)} characters.",
            "stringLength",
        ),
        Rule(
            _string_max,
            lambda field, args, form: f"this field has to contain less than {_arg(args, 0)} characters.",
            "stringMax",
        ),
        Rule(
            _string_min,
            lambda field, args, form: f"this field has to contain at least {_arg(args, 0)} characters.",
            "stringMin",
        ),
        Rule(
            _number_between,
            lambda field, args, form: (
                f"this field must be between {_arg(args, 0)} and {_arg(args, 1)}."
            ),
            "numberBetween",
        ),
        Rule(
            _number_exact,
            lambda field, args, form: f"this field has to be exactly {_arg(args, 0)}.",
            "numberExact",
        ),
        Rule(
            _number_max,
            lambda field, args, form: f"this field has to contain less than {_arg(args, 0)}.",
            "numberMax",
        ),
        Rule(
            _number_min,
            lambda field, args, form: f"this field has to contain at least {_arg(args, 0)}.",
            "numberMin",
        ),
        Rule(
            _files_length,
            lambda field, args, form: f"this field should contain exactly {_arg(args, 0)} files.",
            "filesLength",
        ),
        Rule(
            _files_max,
            lambda field, args, form: f"this field should contain less than {_arg(args, 0)} files.",
            "filesMax",
        ),
        Rule(
            _files_min,
            lambda field, args, form: f"this field should contain at least {_arg(args, 0)} files.",
            "filesMin",
        ),
    ]


# -----------------------------------------------------------------------------
# Cross-Field Rules
# -----------------------------------------------------------------------------


def _sibling_value(form: Any, args: list[str]) -> Any:
    name = _arg(args, 0)
    sibling = form.fields.get(name)
    if sibling is None:
        raise MissingSiblingFieldError(name)
    return sibling.value


def _exact(field, args, form) -> bool:
    other = _sibling_value(form, args)
    return bool(field.value) and field.value == other


def _different(field, args, form) -> bool:
    other = _sibling_value(form, args)
    return bool(field.value) and field.value != other


def _cross_field_rules() -> list[Rule]:
    return [
        Rule(
            _exact,
            lambda field, args, form: f"this field should be the same as the {_arg(args, 0)} field.",
            "exact",
        ),
        Rule(
            _different,
            lambda field, args, form: f"this field should be different from the {_arg(args, 0)} field.",
            "different",
        ),
    ]


# -----------------------------------------------------------------------------
# Format Rules
# -----------------------------------------------------------------------------


def _no_sequence(field, args, form) -> bool:
    text = as_text(field.value)
    return text is None or SEQUENCE_PATTERN.search(text) is None


def _format_rules() -> list[Rule]:
    return [
        Rule(
            _matches_whole(EMAIL_PATTERN),
            _constant("this field has to be a valid email address."),
            "email",
        ),
        Rule(
            _searches(URL_PATTERN),
            _constant("this field has to be a valid url address."),
            "url",
        ),
        Rule(
            _matches_whole(PHONE_PATTERN),
            _constant("this field has to be a valid nigerian phone number."),
            "phone",
        ),
        Rule(
            _matches_whole(MONEY_PATTERN),
            _constant("this field can only be in money format with up to 2 decimal places."),
            "money",
        ),
        Rule(
            _searches(NAME_PATTERN),
            _constant("this field has to be a valid full name."),
            "name",
        ),
        Rule(
            _no_sequence,
            _constant(
                "this field must not contain simple sequences like " + ", ".join(SEQUENCES)
            ),
            "noSequence",
        ),
    ]


# -----------------------------------------------------------------------------
# Date Rules
# -----------------------------------------------------------------------------


def _date(field, args, form) -> bool:
    return as_date(field.value) is not None


def _date_after(field, args, form) -> bool:
    value, limit = as_date(field.value), as_date(_arg(args, 0))
    return value is not None and limit is not None and value > limit


def _date_before(field, args, form) -> bool:
    value, limit = as_date(field.value), as_date(_arg(args, 0))
    return value is not None and limit is not None and value < limit


def _date_between(field, args, form) -> bool:
    value = as_date(field.value)
    start, end = as_date(_arg(args, 0)), as_date(_arg(args, 1))
    if value is None or start is None or end is None:
        return False
    return start <= value <= end


def _date_exact(field, args, form) -> bool:
    value, expected = as_date(field.value), as_date(_arg(args, 0))
    return value is not None and value == expected


def _date_format(field, args, form) -> bool:
    value = field.value
    # date objects carry no textual format
    if isinstance(value, date):
        return True
    if not isinstance(value, str) or not args:
        return False
    try:
        datetime.strptime(value, args[0])
    except ValueError:
        return False
    return True


def _date_rules() -> list[Rule]:
    return [
        Rule(_date, _constant("this field has to be a valid date."), "date"),
        Rule(
            _date_after,
            lambda field, args, form: f"this field has to be a date after {_arg(args, 0)}.",
            "dateAfter",
        ),
        Rule(
            _date_before,
            lambda field, args, form: f"this field has to be a date before {_arg(args, 0)}.",
            "dateBefore",
        ),
        Rule(
            _date_between,
            lambda field, args, form: (
                f"this field has to be a date between {_arg(args, 0)} and {_arg(args, 1)}."
            ),
            "dateBetween",
        ),
        Rule(
            _date_exact,
            lambda field, args, form: f"this field has to be the date {_arg(args, 0)}.",
            "dateExact",
        ),
        Rule(
            _date_format,
            lambda field, args, form: f"this field has to be a date in the format {_arg(args, 0)}.",
            "dateFormat",
        ),
    ]


# -----------------------------------------------------------------------------
# Type Rules
# -----------------------------------------------------------------------------


def _type_rules() -> list[Rule]:
    return [
        Rule(
            lambda field, args, form: isinstance(field.value, bool),
            _constant("this field has to be a boolean."),
            "boolean",
        ),
        Rule(
            lambda field, args, form: isinstance(field.value, (list, tuple)),
            _constant("this field has to be an array."),
            "array",
        ),
        Rule(
            lambda field, args, form: field.value is True,
            _constant("this field has to be true."),
            "true",
        ),
        Rule(
            lambda field, args, form: field.value is False,
            _constant("this field has to be false."),
            "false",
        ),
        Rule(
            lambda field, args, form: is_file(field.value),
            _constant("a file has to be chosen for this field."),
            "file",
        ),
        Rule(
            lambda field, args, form: is_file_list(field.value),
            _constant("this field should contain at least one file."),
            "files",
        ),
    ]


# -----------------------------------------------------------------------------
# Membership Rules
# -----------------------------------------------------------------------------


def _array_contains(field, args, form) -> bool:
    return as_text(field.value) in args


def _array_doesnt_contain(field, args, form) -> bool:
    return as_text(field.value) not in args


def _membership_rules() -> list[Rule]:
    return [
        Rule(
            _array_contains,
            lambda field, args, form: f"this field has to contain any of these {', '.join(args)}.",
            "arrayContains",
        ),
        Rule(
            _array_doesnt_contain,
            lambda field, args, form: f"this field cannot contain any of these {', '.join(args)}.",
            "arrayDoesntContain",
        ),
    ]


def builtin_rules() -> dict[str, Rule]:
    """The complete built-in catalog, keyed by rule name."""
    rules: list[Rule] = [
        *_presence_rules(),
        *_character_rules(),
        *_comparison_rules(),
        *_cross_field_rules(),
        *_format_rules(),
        *_date_rules(),
        *_type_rules(),
        *_membership_rules(),
    ]
    return {rule.name: rule for rule in rules}
