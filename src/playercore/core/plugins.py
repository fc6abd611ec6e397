"""Plugin registry."""

import logging
from collections.abc import Iterator
from typing import Optional

from playercore.element import Element
from playercore.protocols import Plugin, Renderable

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Ordered collection of attached plugins.

    Plugins with the Renderable capability get their element appended to the
    widget's root element as soon as they are added. Lookup is by name and
    returns the first match; duplicates are not rejected.
    """

    def __init__(self, element: Element):
        self.element = element
        self._plugins: list[Plugin] = []

    def add(self, plugin: Plugin) -> None:
        self._plugins.append(plugin)
        if isinstance(plugin, Renderable):
            plugin.render()
            self.element.append_child(plugin.el)
        logger.info(f"Added plugin: {plugin.name}")

    def get(self, name: str) -> Optional[Plugin]:
        """
        Get the first plugin named ``name``.

        Returns:
            The plugin, or None if no plugin has that name
        """
        return next((plugin for plugin in self._plugins if plugin.name == name), None)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def destroy_all(self) -> None:
        """Destroy every plugin once, in attach order, and empty the registry."""
        plugins, self._plugins = self._plugins, []
        for plugin in plugins:
            plugin.destroy()
        logger.debug(f"Destroyed {len(plugins)} plugin(s)")

    def __iter__(self) -> Iterator[Plugin]:
        return iter(list(self._plugins))

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)
