"""Barcode scanning session.

The decoder itself (camera access, frame decoding) is an outside library;
``ScanSession`` only drives it through the small ``Decoder`` protocol and
owns the initializing -> scanning -> success/error lifecycle.
"""
import enum
import logging
import time
from typing import Callable, Optional, Protocol
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

MODE_ADD = "add"
REAR_CAMERA = "environment"
FRONT_CAMERA = "user"

REGISTER_PATH = "/add-product"
HOME_PATH = "/"

CAMERA_ERROR_MESSAGE = (
    "Could not start the camera. Allow camera access in your browser "
    "settings, then reload the page."
)


class ScanState(enum.Enum):
    INITIALIZING = "initializing"
    SCANNING = "scanning"
    SUCCESS = "success"
    ERROR = "error"


class CameraUnavailable(Exception):
    """Camera permission denied or no usable device."""


class FrameDecodeError(Exception):
    """A single frame could not be decoded; scanning carries on."""


class Decoder(Protocol):
    def start(
        self,
        facing_mode: str,
        on_decode: Callable[[str], None],
        on_frame_error: Callable[[FrameDecodeError], None],
    ) -> None:
        ...

    def stop(self) -> None:
        ...


def redirect_for(text: str, mode: Optional[str] = None) -> str:
    """Where a decoded barcode sends the user."""
    if mode == MODE_ADD:
        return f"{REGISTER_PATH}?{urlencode({'jan': text})}"
    return f"{HOME_PATH}?{urlencode({'search': text})}"


class ScanSession:
    def __init__(
        self,
        decoder: Decoder,
        mode: Optional[str] = None,
        navigate: Optional[Callable[[str], None]] = None,
        start_delay: float = 0.3,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.decoder = decoder
        self.mode = mode
        self.navigate = navigate
        self.start_delay = start_delay
        self._sleep = sleep
        self.state = ScanState.INITIALIZING
        self.error_message: Optional[str] = None
        self.result: Optional[str] = None
        self.redirect: Optional[str] = None
        self.facing_mode: Optional[str] = None
        self._running = False
        self._released = False

    @classmethod
    def from_config(cls, config, decoder: Decoder, mode: Optional[str] = None, navigate=None, **kwargs):
        """Build a session using ``SCAN_START_DELAY_MS`` as the warm-up delay."""
        delay_ms = int(config.get("SCAN_START_DELAY_MS", 300))
        return cls(decoder, mode=mode, navigate=navigate, start_delay=delay_ms / 1000, **kwargs)

    def start(self) -> ScanState:
        if self.start_delay:
            self._sleep(self.start_delay)
        for facing in (REAR_CAMERA, FRONT_CAMERA):
            try:
                self.decoder.start(facing, self._on_decode, self._on_frame_error)
            except CameraUnavailable as e:
                logger.info("Camera %s unavailable: %s", facing, e)
                continue
            self.facing_mode = facing
            self._running = True
            self._released = False
            self.state = ScanState.SCANNING
            return self.state
        self.state = ScanState.ERROR
        self.error_message = CAMERA_ERROR_MESSAGE
        return self.state

    def reload(self) -> ScanState:
        """Manual retry after a fatal camera error."""
        self.close()
        self.state = ScanState.INITIALIZING
        self.error_message = None
        self.result = None
        self.redirect = None
        self._released = False
        return self.start()

    def _on_decode(self, text: str) -> None:
        if self.state is not ScanState.SCANNING:
            return
        self._stop_decoder()
        self.result = text
        self.redirect = redirect_for(text, self.mode)
        self.state = ScanState.SUCCESS
        if self.navigate:
            self.navigate(self.redirect)

    def _on_frame_error(self, exc: FrameDecodeError) -> None:
        # Misses on individual frames are normal while aiming the camera.
        return None

    def _stop_decoder(self) -> None:
        if not self._running:
            return
        self._running = False
        self._release()

    def _release(self) -> None:
        try:
            self.decoder.stop()
        except Exception:
            logger.warning("Failed to release camera", exc_info=True)
        self._released = True

    def close(self) -> None:
        """Release the camera whatever state the session ended in."""
        self._running = False
        if not self._released:
            self._release()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
