"""
A pretty-printer for forth values.
"""
from forth.forth_datatypes import Token, ForthError


class Printer:
    """Formats forth objects into readable, valid forth source strings."""

    def __init__(self, show_depth=False):
        self.show_depth = show_depth
        self._handlers = self._create_handlers()

    def pformat(self, obj):
        """Public entry point to format an object."""
        handler = self._get_handler(obj)
        return handler(obj)

    def _get_handler(self, obj):
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        if isinstance(obj, ForthError):
            return self._pformat_error
        if isinstance(obj, (list, tuple)):
            return self._pformat_stack
        return repr

    def _create_handlers(self):
        return {
            int: self._pformat_int,
            list: self._pformat_stack,
            tuple: self._pformat_stack,
            Token: self._pformat_token,
        }

    def _pformat_int(self, obj):
        return str(obj)

    def _pformat_stack(self, obj):
        body = " ".join(self.pformat(v) for v in obj)
        if self.show_depth:
            return f"<{len(obj)}> {body}".rstrip()
        return body

    def _pformat_token(self, obj):
        return obj.text

    def _pformat_error(self, obj):
        return f"{obj.kind}: {obj}"
