"""Built-in fragment library.

``core`` is installed directly by whoever builds the registry. The deep,
xray and personality sets are extensions: ``queue_extensions`` pushes
their installers onto an extension queue so they land in the registry
when it drains the queue, whatever order the modules were loaded in.

Usage:
    from leadview import library
    from leadview.extensions import extension_queue

    library.queue_extensions(extension_queue)
    registry = FragmentRegistry(installers=[library.install_core],
                                extensions=extension_queue)
"""

from . import core, deep, personality, xray

install_core = core.install

EXTENSION_INSTALLERS = (
    deep.install,
    xray.install,
    personality.install,
)


def queue_extensions(queue) -> None:
    """Push the deep, xray and personality installers onto ``queue``."""
    for installer in EXTENSION_INSTALLERS:
        queue.push(installer)


def install(registry) -> None:
    """Install every built-in fragment directly."""
    core.install(registry)
    for installer in EXTENSION_INSTALLERS:
        installer(registry)


__all__ = [
    "core",
    "deep",
    "xray",
    "personality",
    "install",
    "install_core",
    "queue_extensions",
    "EXTENSION_INSTALLERS",
]
