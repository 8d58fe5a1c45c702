from panelbot.core.errors import (
    DashboardServiceError,
    DeliveryFailure,
    ExitCode,
    FetchError,
    InvalidCommand,
    PanelBotError,
    format_error_message,
    main_with_error_handling,
)


def test_exit_codes():
    assert InvalidCommand("x").exit_code == ExitCode.INVALID_COMMAND
    assert FetchError("x").exit_code == ExitCode.PROVIDER_ERROR
    assert DashboardServiceError("x").exit_code == ExitCode.PROVIDER_ERROR
    assert DeliveryFailure("Upload Error", "x").exit_code == ExitCode.DELIVERY_ERROR


def test_delivery_failure_keeps_reason():
    error = DeliveryFailure("Access Error", "proxy said no", {"status": 403})

    assert error.reason == "Access Error"
    assert isinstance(error, PanelBotError)
    assert format_error_message(error) == "proxy said no (status=403)"


def test_format_without_details():
    assert format_error_message(FetchError("boom")) == "boom"


def test_main_with_error_handling_maps_errors():
    @main_with_error_handling()
    def failing() -> int:
        raise InvalidCommand("bad", {"command": "db"})

    @main_with_error_handling()
    def crashing() -> int:
        raise RuntimeError("unexpected")

    @main_with_error_handling()
    def ok() -> int:
        return 0

    assert failing() == ExitCode.INVALID_COMMAND
    assert crashing() == ExitCode.UNKNOWN_ERROR
    assert ok() == 0
