from inkwell.dependencies.dependencies import (
    USER_ID_HEADER,
    ContextDep,
    CurrentUserDep,
    OptionalUserDep,
    PageQuery,
    PageQueryDep,
    StorageDep,
    bearer_scheme,
    get_context,
    get_current_user,
    get_optional_user,
    get_page_query,
    require_legacy_registration,
)

__all__ = [
    "USER_ID_HEADER",
    "ContextDep",
    "CurrentUserDep",
    "OptionalUserDep",
    "PageQuery",
    "PageQueryDep",
    "StorageDep",
    "bearer_scheme",
    "get_context",
    "get_current_user",
    "get_optional_user",
    "get_page_query",
    "require_legacy_registration",
]
