"""Hierarchical account names for double-entry ledgers."""

from enum import Enum


class AccountType(Enum):
    """Account type encoded by the first character of an account name."""

    NONE = "none"
    ASSET = "asset"
    DEBT = "debt"
    EXPENSE = "expense"
    INCOME = "income"

    def __str__(self) -> str:
        return self.value


ACCOUNT_TYPES = {
    "a": AccountType.ASSET,
    "d": AccountType.DEBT,
    "e": AccountType.EXPENSE,
    "i": AccountType.INCOME,
}

# Length of the type character and the following colon, e.g. "e:".
TYPE_PREFIX_LENGTH = 2


def _is_segment(segment: str) -> bool:
    return bool(segment) and all(c.isalpha() or c == "-" for c in segment)


def parse_account_path(name: str) -> tuple[AccountType, list[str]]:
    """Split an account name into its type and dot separated segments.

    Returns (type, segments). A bare type prefix such as "e:" has no
    segments. Raises ValueError for malformed names.
    """
    if len(name) < TYPE_PREFIX_LENGTH or name[1] != ":":
        raise ValueError(f"Invalid account name: '{name}'")
    root = name[0]
    if root not in ACCOUNT_TYPES:
        valid = ", ".join(sorted(ACCOUNT_TYPES))
        raise ValueError(
            f"Invalid account type '{root}' in '{name}'. Must be one of: {valid}"
        )
    path = name[TYPE_PREFIX_LENGTH:]
    if not path:
        return ACCOUNT_TYPES[root], []
    segments = path.split(".")
    for segment in segments:
        if not _is_segment(segment):
            raise ValueError(f"Invalid account segment '{segment}' in '{name}'")
    return ACCOUNT_TYPES[root], segments


def is_valid_account_name(name: str) -> bool:
    try:
        parse_account_path(name)
    except ValueError:
        return False
    return True


def is_alias_name(text: str) -> bool:
    """Alias names are letters, digits and hyphens. They never contain ':'."""
    return bool(text) and all(c.isalpha() or c.isnumeric() or c == "-" for c in text)


class AccountName(str):
    """An account name like "e:food.snacks".

    The derived properties assume a valid name, see is_valid().
    """

    @property
    def type(self) -> AccountType:
        return ACCOUNT_TYPES.get(self[:1], AccountType.NONE)

    @property
    def parent(self) -> "AccountName":
        """Parent name, e.g. "e:food.snacks" -> "e:food" -> "e:" -> "".

        The parent of a bare type prefix is the empty name.
        """
        index = self.rfind(".")
        if index == -1:
            index = TYPE_PREFIX_LENGTH if len(self) > TYPE_PREFIX_LENGTH else 0
        return AccountName(self[:index])

    @property
    def leaf(self) -> str:
        """Last segment, or the type display name for a bare prefix."""
        index = self.rfind(".")
        if index != -1:
            return self[index + 1:]
        if len(self) > TYPE_PREFIX_LENGTH:
            return self[TYPE_PREFIX_LENGTH:]
        return str(self.type)

    @property
    def depth(self) -> int:
        if len(self) <= TYPE_PREFIX_LENGTH:
            return 0
        return 1 + self.count(".")

    def ancestors(self):
        """Yield this name followed by each parent up to the type prefix."""
        name = self
        while name:
            yield name
            name = name.parent

    def is_valid(self) -> bool:
        return is_valid_account_name(self)
