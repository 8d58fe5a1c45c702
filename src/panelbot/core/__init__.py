from panelbot.core.errors import (
    ConfigurationError,
    DashboardServiceError,
    DeliveryFailure,
    ExitCode,
    FetchError,
    InvalidCommand,
    PanelBotError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ConfigurationError",
    "DashboardServiceError",
    "DeliveryFailure",
    "ExitCode",
    "FetchError",
    "InvalidCommand",
    "PanelBotError",
    "format_error_message",
    "main_with_error_handling",
]
