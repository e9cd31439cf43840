from .middleware import (
    base_request_context,
    relative_request_context,
    terminal_handler_ok,
    terminal_handler_fail,
)
from .transport import (
    FakeClock,
    FakeTransportEngine,
    tcp_config_no_tls,
    tls_config_disabled,
)


__all__ = [
    'base_request_context',
    'relative_request_context',
    'terminal_handler_ok',
    'terminal_handler_fail',
    'FakeClock',
    'FakeTransportEngine',
    'tcp_config_no_tls',
    'tls_config_disabled',
]
