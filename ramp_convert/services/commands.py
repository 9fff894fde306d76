# Context menu command registration
"""
Explicit registration of context menu commands for the asset browser.

A ``ContextMenuRegistry`` holds *extenders*: callables that inspect the
current selection and return the commands applicable to it. Extensions
register an extender on startup and remove it on shutdown through the
handle they got back, so no command is bound to a global instance.
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..config import settings
from ..io.texture_loader import is_texture_file
from ..utils.logger import get_logger

logger = get_logger(__name__)

Extender = Callable[[Sequence[str]], List["MenuCommand"]]


@dataclass
class MenuCommand:
    command_id: str
    label: str
    tooltip: str
    callback: Callable[[], object]
    section: str = field(default_factory=lambda: settings.UI_DEFAULTS.get("menu_section", ""))

    def execute(self):
        logger.debug("Executing command '%s'", self.command_id)
        return self.callback()


class ContextMenuRegistry:
    """Ordered collection of menu extenders, addressed by integer handles."""

    def __init__(self) -> None:
        self._extenders: Dict[int, Extender] = {}
        self._handles = itertools.count(1)

    def add_extender(self, extender: Extender) -> int:
        handle = next(self._handles)
        self._extenders[handle] = extender
        return handle

    def remove_extender(self, handle: int) -> bool:
        return self._extenders.pop(handle, None) is not None

    def __len__(self) -> int:
        return len(self._extenders)

    def build_menu(self, selection: Sequence[str]) -> List[MenuCommand]:
        """Collects the commands every registered extender offers for ``selection``."""
        commands: List[MenuCommand] = []
        for extender in list(self._extenders.values()):
            commands.extend(extender(list(selection)) or [])
        return commands


class RampConvertExtension:
    """Adds "Generate Curve from Ramp Texture" to the context menu of texture selections."""

    COMMAND_ID = "ramp_convert.generate_curves"
    LABEL = "Generate Curve from Ramp Texture"
    TOOLTIP = "Generates curves from a ramp texture"

    def __init__(
        self,
        service,
        on_finished: Optional[Callable[[dict], None]] = None,
        runner: Optional[Callable[[List[str]], object]] = None,
    ):
        self.service = service
        self.on_finished = on_finished
        # Hosts with an event loop pass a runner that schedules generate() elsewhere
        self.runner = runner if runner is not None else self.generate
        self._handle: Optional[int] = None

    @property
    def is_started(self) -> bool:
        return self._handle is not None

    def startup(self, registry: ContextMenuRegistry) -> None:
        if self._handle is None:
            self._handle = registry.add_extender(self.extend_menu)

    def shutdown(self, registry: ContextMenuRegistry) -> None:
        if self._handle is not None:
            registry.remove_extender(self._handle)
            self._handle = None

    def extend_menu(self, selection: Sequence[str]) -> List[MenuCommand]:
        if not selection or not all(is_texture_file(path) for path in selection):
            return []
        paths = list(selection)
        return [MenuCommand(
            command_id=self.COMMAND_ID,
            label=self.LABEL,
            tooltip=self.TOOLTIP,
            callback=lambda: self.runner(paths),
        )]

    def generate(self, paths: Sequence[str]) -> dict:
        results = self.service.generate_ramps(paths)
        if self.on_finished is not None:
            self.on_finished(results)
        return results
