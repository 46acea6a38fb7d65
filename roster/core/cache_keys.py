"""Cache Keys — naming for cached list pages."""

USERS_LIST_PREFIX = "users:list"
GROUPS_LIST_PREFIX = "groups:list"

# Prefixes dropped after any committed mutation
LIST_PREFIXES = (USERS_LIST_PREFIX, GROUPS_LIST_PREFIX)


def users_list_key(limit: int, offset: int) -> str:
    return f"{USERS_LIST_PREFIX}:{limit}:{offset}"


def groups_list_key(limit: int, offset: int) -> str:
    return f"{GROUPS_LIST_PREFIX}:{limit}:{offset}"
