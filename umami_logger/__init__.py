__version__ = "0.1.0"

from .config import UmamiConfig, config_from_mapping
from .environment import BrowserContext, Environment
from .facade import (
    clear_identity,
    clear_tag,
    get_config,
    get_session_data,
    get_session_id,
    identify,
    initialize,
    reset,
    set_tag,
    track,
    track_event,
    track_page_view,
    track_revenue,
)
from .logs import setup_logging
from .models import Envelope, UmamiPayload, UmamiResponse
from .reporter import SendError, UmamiLogger
