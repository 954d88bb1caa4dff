"""
System Tray Launcher

Adds a tray icon at startup with two actions: open the web UI in the default
browser, and quit the application. Tray problems are never fatal: the backend
keeps serving when the platform has no tray or the icon cannot be created.
"""

import logging
import os
import signal
import webbrowser
from pathlib import Path
from typing import Callable, Optional

from PIL import Image, ImageDraw

from constants import TrayConfig
from exceptions import PlatformIntegrationError

logger = logging.getLogger(__name__)


def _load_pystray():
    """Import pystray, or return None when no tray backend is usable here."""
    try:
        import pystray
    except Exception as e:
        # pystray picks a backend at import time and fails without a display
        logger.debug(f"pystray unavailable: {e}")
        return None
    return pystray


def _terminate_process():
    # SIGTERM lets uvicorn run the lifespan shutdown
    os.kill(os.getpid(), signal.SIGTERM)


class SystemTrayLauncher:
    """
    Tray icon bound to the application URL.

    The default action (clicking the icon) and the "open" menu entry open the
    application URL; the "quit" entry removes the icon and stops the process.
    """

    def __init__(
        self,
        app_name: str,
        base_url: str,
        icon_path: Optional[Path] = None,
        shutdown: Optional[Callable[[], None]] = None,
        open_url: Callable[[str], bool] = webbrowser.open,
    ):
        """
        Args:
            app_name: Tooltip of the tray icon
            base_url: URL opened in the browser
            icon_path: Optional image file for the icon (generated when missing)
            shutdown: Called after the icon is removed (defaults to SIGTERM on self)
            open_url: Browser launcher
        """
        self.app_name = app_name
        self.base_url = base_url
        self.icon_path = icon_path
        self._shutdown = shutdown or _terminate_process
        self._open_url = open_url
        self._icon = None

    def create_icon_image(self) -> Image.Image:
        """Load the icon file, or draw the application initial on a plain square."""
        if self.icon_path and Path(self.icon_path).exists():
            return Image.open(self.icon_path)

        size = TrayConfig.ICON_SIZE
        image = Image.new('RGB', (size, size), color=TrayConfig.ICON_BACKGROUND)
        draw = ImageDraw.Draw(image)
        initial = (self.app_name[:1] or '?').upper()
        bbox = draw.textbbox((0, 0), initial)
        position = ((size - (bbox[2] - bbox[0])) // 2, (size - (bbox[3] - bbox[1])) // 2)
        draw.text(position, initial, fill=TrayConfig.ICON_FOREGROUND)
        return image

    def _launch_browser(self) -> None:
        try:
            opened = self._open_url(self.base_url)
        except Exception as e:
            raise PlatformIntegrationError("browser", f"Failed to open a new tab in the default browser: {e}") from e
        if not opened:
            raise PlatformIntegrationError("browser", "Failed to open a new tab in the default browser: no browser available")

    def open_application(self, icon=None, item=None) -> bool:
        """
        Open the application URL in the default browser.

        Returns:
            True if a browser was launched
        """
        logger.debug(f"Opening a new tab in the default browser with the URL : {self.base_url}")
        try:
            self._launch_browser()
        except PlatformIntegrationError as e:
            logger.error(e.message, exc_info=True)
            return False
        return True

    def quit_application(self, icon=None, item=None) -> None:
        """Remove the tray icon and shut the application down."""
        logger.debug("Removing the application tray icon from the system tray")
        self.stop()
        logger.info("Exiting the application")
        self._shutdown()

    def start(self) -> bool:
        """
        Register the tray icon.

        Returns:
            True if the icon is shown, False if the tray is unsupported or failed
        """
        pystray = _load_pystray()
        if pystray is None:
            logger.warning("System tray not supported on this platform")
            return False

        logger.debug("Adding the application tray icon to the system tray")
        try:
            self._icon = self._register_icon(pystray)
        except PlatformIntegrationError as e:
            logger.error(e.message, exc_info=True)
            return False
        return True

    def _register_icon(self, pystray):
        try:
            menu = pystray.Menu(
                pystray.MenuItem(TrayConfig.OPEN_LABEL, self.open_application, default=True),
                pystray.MenuItem(TrayConfig.QUIT_LABEL, self.quit_application),
            )
            icon = pystray.Icon(self.app_name.lower(), self.create_icon_image(), self.app_name, menu)
            icon.run_detached()
        except Exception as e:
            raise PlatformIntegrationError("tray", f"Tray icon could not be added: {e}") from e
        return icon

    def stop(self) -> None:
        if self._icon is None:
            return
        icon, self._icon = self._icon, None
        try:
            icon.stop()
        except Exception as e:
            logger.warning(f"Failed to remove the tray icon: {e}")
