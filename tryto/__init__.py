from .result import Failure as Failure
from .result import NotFailedError as NotFailedError
from .result import PredicateError as PredicateError
from .result import Success as Success
from .result import Try as Try
from .result import of as of
from .result import of_failure as of_failure
from .result import to as to
