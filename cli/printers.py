"""Output formats for the ksuid command."""

from enum import Enum


class Format(str, Enum):
    """Supported -f values."""

    STRING = "string"
    INSPECT = "inspect"
    TIME = "time"
    TIMESTAMP = "timestamp"
    PAYLOAD = "payload"
    RAW = "raw"
    TEMPLATE = "template"


def render_template(ksuid, template, tz=None):
    """Substitute the Go template fields {{.String}}, {{.Raw}}, {{.Time}}, {{.Timestamp}}, {{.Payload}}."""
    fields = {
        "{{.String}}": lambda: str(ksuid),
        "{{.Raw}}": lambda: ksuid.raw,
        "{{.Time}}": lambda: ksuid.time(tz),
        "{{.Timestamp}}": lambda: str(ksuid.timestamp),
        "{{.Payload}}": lambda: ksuid.payload_hex,
    }
    result = template
    for field, value in fields.items():
        if field in result:
            result = result.replace(field, value())
    return result


# Binary formats return bytes and are written without a trailing newline
PRINTERS = {
    Format.STRING: lambda ksuid, template, tz: str(ksuid),
    Format.INSPECT: lambda ksuid, template, tz: ksuid.inspect(tz),
    Format.TIME: lambda ksuid, template, tz: ksuid.time(tz),
    Format.TIMESTAMP: lambda ksuid, template, tz: str(ksuid.timestamp),
    Format.PAYLOAD: lambda ksuid, template, tz: ksuid.payload,
    Format.RAW: lambda ksuid, template, tz: bytes(ksuid),
    Format.TEMPLATE: render_template,
}


def render(fmt, ksuid, template="", tz=None):
    return PRINTERS[Format(fmt)](ksuid, template, tz)
