import sys
import enum
import types
import textwrap
from collections import OrderedDict
from typing_extensions import Self


__all__ = ["bitstruct", "Format", "FLAG", "UINT", "HEX"]


class Format(enum.Enum):
    """Rendering convention of a register field."""
    FLAG = "flag" # 0 or 1
    UINT = "uint" # unsigned decimal
    HEX  = "hex"  # zero-padded hexadecimal, one digit per started nibble

    def render(self, value, width):
        if self is Format.FLAG:
            return "1" if value else "0"
        elif self is Format.UINT:
            return f"{value:d}"
        elif self is Format.HEX:
            return f"{value:0{(width + 3) // 4}X}"
        else:
            assert False

FLAG = Format.FLAG
UINT = Format.UINT
HEX  = Format.HEX


class _bitstruct:
    __slots__ = ()

    @staticmethod
    def _check_int_(action, expected_width, value):
        assert isinstance(value, int)
        if value < 0:
            raise ValueError("%s requires a non-negative integer, got %d"
                             % (action, value))
        if value.bit_length() > expected_width:
            raise ValueError("%s requires a %d-bit integer, got %d-bit (%d)"
                             % (action, expected_width, value.bit_length(), value))

    @staticmethod
    def _define_fields_(cls, declared_bits, fields):
        layout = []
        for field in fields:
            if len(field) == 2:
                name, width = field
                format = FLAG if width == 1 else UINT
            else:
                name, width, format = field
            layout.append((name, width, Format(format)))

        total_bits = sum(width for name, width, format in layout)
        if total_bits != declared_bits:
            raise TypeError("declared width is %d bits, but sum of field widths is %d bits"
                            % (declared_bits, total_bits))

        cls["_size_bits_"]    = declared_bits
        cls["_named_fields_"] = []
        cls["_layout_"]       = OrderedDict()

        offset = 0
        for name, width, format in layout:
            if name is None:
                name = "padding_%d" % offset
            else:
                cls["_named_fields_"].append(name)
            cls["_layout_"][name] = (offset, width, format)
            offset += width

        cls["__slots__"] = tuple(f"_f_{field}" for field in cls["_layout_"])

        code = textwrap.dedent(f"""
        def __init__(self, {", ".join(f"{field}=0" for field in cls["_named_fields_"])}):
            {"; ".join(f"self.{field} = 0"
                       for field in cls["_layout_"] if field not in cls["_named_fields_"])}
            {"; ".join(f"self.{field} = {field}"
                       for field in cls["_layout_"] if field in cls["_named_fields_"])}

        @classmethod
        def from_int(cls, value):
            cls._check_int_("initialization", cls._size_bits_, value)
            self = object.__new__(cls)
            {"; ".join(f"self._f_{field} = (value >> {offset}) & {(1 << width) - 1:#x}"
                       for field, (offset, width, _) in cls["_layout_"].items())}
            return self

        def to_int(self):
            value = 0
            {"; ".join(f"value |= self._f_{field} << {offset}"
                       for field, (offset, width, _) in cls["_layout_"].items())}
            return value
        """)

        for field, (offset, width, format) in cls["_layout_"].items():
            code += textwrap.dedent(f"""
            @property
            def {field}(self):
                return self._f_{field}

            @{field}.setter
            def {field}(self, value):
                self._check_int_("field assignment", {width}, int(value))
                self._f_{field} = int(value)
            """)

        methods = {}
        exec(code, globals(), methods)
        for name, method in methods.items():
            cls[name] = method

    @classmethod
    def bit_length(cls):
        return cls._size_bits_

    @classmethod
    def field_names(cls):
        return tuple(cls._named_fields_)

    def __int__(self):
        return self.to_int()

    def copy(self) -> Self:
        return self.__class__.from_int(self.to_int())

    def fields(self):
        """Yield ``(name, value, rendered)`` for every named field, LSB first."""
        for name in self._named_fields_:
            offset, width, format = self._layout_[name]
            value = getattr(self, name)
            yield name, value, format.render(value, width)

    def fields_repr(self, omit_zero=False):
        """Render named fields as ``NAME:value`` pairs, e.g. ``APSEL:01 APBANKSEL:0``."""
        return " ".join(f"{name}:{rendered}"
                        for name, value, rendered in self.fields()
                        if not (omit_zero and value == 0))

    def __repr__(self):
        return f"<{self.__module__}.{self.__class__.__name__} {self.fields_repr()}>"

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.to_int() == other.to_int()

    def __hash__(self):
        return hash((self.__class__, self.to_int()))


def bitstruct(name, size_bits, fields):
    """
    Define a register layout.

    ``fields`` is a list of ``(name, width)`` or ``(name, width, format)`` tuples, LSB first.
    A ``None`` name declares reserved bits. Without an explicit format, 1-bit fields render
    as flags and wider fields as unsigned decimal.
    """
    mod = sys._getframe(1).f_globals["__name__"] # see namedtuple()

    cls = types.new_class(name, (_bitstruct,),
        exec_body=lambda ns: _bitstruct._define_fields_(ns, size_bits, fields))
    cls.__module__ = mod

    return cls
