import time
from typing import TYPE_CHECKING  # noqa:F401
from typing import Any  # noqa:F401
from typing import Optional  # noqa:F401

import wrapt

from tracebridge.internal.logger import get_logger


if TYPE_CHECKING:  # pragma: no cover
    from tracebridge._trace.interfaces import BreadcrumbStore  # noqa:F401
    from tracebridge._trace.interfaces import Clock  # noqa:F401
    from tracebridge._trace.interfaces import TracingClient  # noqa:F401
    from tracebridge.settings import ConfigProtocol  # noqa:F401


log = get_logger(__name__)


# To set attributes on wrapt proxy objects use this prefix:
# http://wrapt.readthedocs.io/en/latest/wrappers.html
_PIN_NAME = "_tracebridge_pin"
_PIN_PROXY_NAME = "_self_" + _PIN_NAME

_NOT_SET = object()


class Pin(object):
    """Pin (a.k.a Patch INfo) bundles everything an instrumented client needs:
    the tracing client, the configuration, the breadcrumb store and the clock.

    A pin is built once by the application and handed to each instrumented
    transport explicitly::

        >>> pin = Pin(tracer=my_tracing_client, breadcrumbs=BreadcrumbBuffer())
        >>> adapter = TracedAdapter(HTTPAdapter(), pin)
        >>> # re-point a single client, keeping its other settings
        >>> Pin.override(adapter, tracer=other_tracing_client)
    """

    __slots__ = ["_tracer", "_config", "_breadcrumbs", "_clock", "_target", "_initialized"]

    def __init__(
        self,
        tracer=None,  # type: Optional[TracingClient]
        config=None,  # type: Optional[ConfigProtocol]
        breadcrumbs=None,  # type: Optional[BreadcrumbStore]
        clock=None,  # type: Optional[Clock]
    ):
        # type: (...) -> None
        if config is None:
            from tracebridge.settings import config as global_config

            config = global_config

        self._tracer = tracer
        self._config = config
        self._breadcrumbs = breadcrumbs
        self._clock = clock or time.time
        self._target = None  # type: Optional[int]
        self._initialized = True

    def __setattr__(self, name, value):
        if getattr(self, "_initialized", False) and name != "_target":
            raise AttributeError("can't mutate a pin, use override() or clone() instead")
        super(Pin, self).__setattr__(name, value)

    @property
    def tracer(self):
        # type: () -> Optional[TracingClient]
        return self._tracer

    @property
    def config(self):
        # type: () -> ConfigProtocol
        return self._config

    @property
    def breadcrumbs(self):
        # type: () -> Optional[BreadcrumbStore]
        return self._breadcrumbs

    @property
    def clock(self):
        # type: () -> Clock
        return self._clock

    @property
    def initialized(self):
        # type: () -> bool
        """True when a tracing client is set up and the instrumentation is enabled."""
        return self._tracer is not None and bool(self._config.enabled)

    def __repr__(self):
        return "Pin(tracer=%r, config=%r, breadcrumbs=%r)" % (self._tracer, self._config, self._breadcrumbs)

    @staticmethod
    def get_from(obj):
        # type: (Any) -> Optional[Pin]
        """Return the pin associated with the given object. If a pin is attached to
        `obj` but the instance is not the owner of the pin, a new pin is cloned and
        attached. This ensures that a pin inherited from a class is a copy for the new
        instance, avoiding that a specific instance overrides other pins values.

            >>> pin = Pin.get_from(transport)
        """
        pin_name = _PIN_PROXY_NAME if isinstance(obj, wrapt.ObjectProxy) else _PIN_NAME
        pin = getattr(obj, pin_name, None)
        # detect if the PIN has been inherited from a class
        if pin is not None and pin._target != id(obj):
            pin = pin.clone()
            pin.onto(obj)
        return pin

    @classmethod
    def override(cls, obj, tracer=_NOT_SET, config=None, breadcrumbs=_NOT_SET, clock=None):
        # type: (Any, Any, Optional[ConfigProtocol], Any, Optional[Clock]) -> None
        """Override an object with the given attributes.

        That's the recommended way to customize an already instrumented client, without
        losing existing attributes.
        """
        if obj is None:
            return

        pin = cls.get_from(obj)
        if pin is None:
            pin = Pin()
        pin.clone(tracer=tracer, config=config, breadcrumbs=breadcrumbs, clock=clock).onto(obj)

    def onto(self, obj):
        # type: (Any) -> None
        """Attach this pin to the given object.

        A pin belongs to a single object: when it is already attached elsewhere
        a clone is attached instead, the pin itself is left untouched.
        """
        try:
            pin_name = _PIN_PROXY_NAME if isinstance(obj, wrapt.ObjectProxy) else _PIN_NAME

            pin = self
            if self._target is not None and self._target != id(obj):
                pin = self.clone()
            # set the target reference; any get_from, clones and retarget the new PIN
            pin._target = id(obj)
            return setattr(obj, pin_name, pin)
        except AttributeError:
            log.debug("can't pin onto object. skipping", exc_info=True)

    def remove_from(self, obj):
        # type: (Any) -> None
        try:
            pin_name = _PIN_PROXY_NAME if isinstance(obj, wrapt.ObjectProxy) else _PIN_NAME

            pin = Pin.get_from(obj)
            if pin is not None:
                delattr(obj, pin_name)
        except AttributeError:
            log.debug("can't remove pin from object. skipping", exc_info=True)

    def clone(self, tracer=_NOT_SET, config=None, breadcrumbs=_NOT_SET, clock=None):
        # type: (Any, Optional[ConfigProtocol], Any, Optional[Clock]) -> Pin
        """Return a clone of the pin with the given attributes replaced."""
        return Pin(
            tracer=self._tracer if tracer is _NOT_SET else tracer,
            config=self._config if config is None else config,
            breadcrumbs=self._breadcrumbs if breadcrumbs is _NOT_SET else breadcrumbs,
            clock=clock or self._clock,
        )
