"""Fast-refresh instrumentation for JavaScript and JSX modules."""

# Errors
from pulse_refresh.errors import ParseError as ParseError
from pulse_refresh.errors import RefreshError as RefreshError

# Parsing and emitting
from pulse_refresh.nodes import Program as Program
from pulse_refresh.nodes import emit as emit
from pulse_refresh.parser import parse as parse

# Refresh pass
from pulse_refresh.refresh import REGISTER as REGISTER
from pulse_refresh.refresh import SIGNATURE as SIGNATURE
from pulse_refresh.refresh import RefreshResult as RefreshResult
from pulse_refresh.refresh import Registration as Registration
from pulse_refresh.refresh import SignatureSite as SignatureSite
from pulse_refresh.refresh import refresh_source as refresh_source
from pulse_refresh.refresh import transform as transform
