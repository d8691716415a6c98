"""
Navigation-model engine for the places applet.
"""

from .applet import PlacesApplet  # noqa: F401
from .config_sync import ConfigSyncController, load_initial_state  # noqa: F401
from .nav_model import NavigationModelBuilder  # noqa: F401
from .popup_lifecycle import PopupLifecycle  # noqa: F401
