"""Provider registry."""

from .registry import (
    PROVIDERS,
    InvalidProviderError,
    InvalidScopeError,
    ProviderId,
    ProviderInfo,
    ProviderDisabledError,
    ProviderPaths,
    SameProviderError,
    Scope,
    all_providers,
    create_converter,
    create_parser,
    default_target,
    display_name,
    ensure_enabled,
    get_provider_info,
    is_enabled,
    is_valid_provider,
    is_valid_scope,
    parse_provider,
    parse_scope,
    resolve_paths,
    validate_sync_pair,
)

__all__ = [
    "PROVIDERS",
    "InvalidProviderError",
    "InvalidScopeError",
    "ProviderId",
    "ProviderInfo",
    "ProviderDisabledError",
    "ProviderPaths",
    "SameProviderError",
    "Scope",
    "all_providers",
    "create_converter",
    "create_parser",
    "default_target",
    "display_name",
    "ensure_enabled",
    "get_provider_info",
    "is_enabled",
    "is_valid_provider",
    "is_valid_scope",
    "parse_provider",
    "parse_scope",
    "resolve_paths",
    "validate_sync_pair",
]
