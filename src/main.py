import logging
import signal
import sys
import webbrowser
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config, resolve_config_path
from break_timer import BreakTimerController, JsonSettingsStore, Notifier
from notify import DesktopNotifier, NotifierConfig, NotifierConfigurationError
from runtime import (
    RuntimeBootstrap,
    RuntimeEngine,
    RuntimeHooks,
    RuntimeUIPublisher,
    WebBreakDisplay,
)
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("break_alarm")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Stop the runtime loop gracefully on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logging.getLogger("break_alarm").info(
            "%s received, stopping.", signal.Signals(signum).name
        )
        engine.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def start_ui_server(
    app_config: AppConfig,
    logger: logging.Logger,
) -> Optional[UIServer]:
    """Start the websocket UI server, or return None and keep running headless."""
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")
        return None

    if not ui_server_config.enabled:
        logger.info("UI server disabled via ui_server.enabled=false")
        return None

    try:
        ui_server = UIServer(
            config=ui_server_config,
            logger=logging.getLogger("ui_server"),
        )
        logger.info("Starting UI server...")
        ui_server.start(timeout_seconds=5.0)
    except Exception as error:
        logger.error("UI server startup failed: %s", error)
        logger.warning("Continuing without UI server.")
        return None

    logger.info("UI server ready at http://%s:%d", ui_server.host, ui_server.port)
    if ui_server_config.open_browser:
        webbrowser.open(ui_server_config.base_url)
    return ui_server


def build_notifier(
    app_config: AppConfig,
    logger: logging.Logger,
) -> Optional[Notifier]:
    if not app_config.notifications.enabled:
        logger.info("Desktop notifications disabled")
        return None
    try:
        config = NotifierConfig.from_settings(app_config.notifications)
    except NotifierConfigurationError as error:
        logger.error("Notification configuration error: %s", error)
        logger.warning("Continuing without desktop notifications.")
        return None
    return DesktopNotifier(config=config, logger=logging.getLogger("notify"))


def main() -> int:
    """Run the break alarm until interrupted."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.logging.level)

    ui_server = start_ui_server(app_config, logger)
    ui = RuntimeUIPublisher(ui_server)

    break_display: Optional[WebBreakDisplay] = None
    if app_config.break_display.enabled:
        break_display = WebBreakDisplay(
            ui,
            break_url=ui_server.break_url if ui_server else None,
            open_browser=app_config.break_display.open_browser,
            logger=logging.getLogger("break_display"),
        )

    controller = BreakTimerController(
        break_display=break_display,
        notifier=build_notifier(app_config, logger),
        logger=logging.getLogger("break_timer"),
    )
    timer_settings = app_config.timer
    controller.update_settings(
        {
            "work_minutes": timer_settings.work_minutes,
            "break_seconds": timer_settings.break_seconds,
            "auto_start_next": timer_settings.auto_start_next,
        }
    )

    settings_store: Optional[JsonSettingsStore] = None
    if timer_settings.settings_file:
        settings_store = JsonSettingsStore(
            timer_settings.settings_file,
            logger=logging.getLogger("settings_store"),
        )
        saved = settings_store.load()
        if saved:
            controller.update_settings(saved)
            logger.info("Restored saved settings from %s", settings_store.path)

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            controller=controller,
            ui=ui,
            ui_server=ui_server,
            break_display=break_display,
            settings_store=settings_store,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
            pulse_interval_ms=timer_settings.pulse_interval_ms,
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
