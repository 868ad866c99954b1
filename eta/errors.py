
class EtaError(Exception):
    """ Base class for all Eta errors"""

    def __init__(self, message: str, context: str | None = None):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self):
        if self.context:
            return f"[{self.context}]: {self.message}"
        return self.message

class EtaVariableNotFound(EtaError):
    """ Raised when an atom is not bound in the environment"""

class EtaArityError(EtaError):
    """ Raised when the number of arguments passed to a primitive or closure is incorrect"""

class EtaTypeError(EtaError):
    """ Raised when an argument evaluates to a value of the wrong variant"""

class EtaInvalidParameter(EtaError):
    """ Raised when a lambda parameter list is malformed"""

class EtaNotApplicable(EtaError):
    """ Raised when something that is not a procedure is applied"""

class EtaUnsupported(EtaError):
    """ Raised by declared but unimplemented primitives"""

class EtaArithmeticError(EtaError):
    """ Raised on division or modulus by zero"""

class EtaSyntaxError(EtaError):
    """ Raised when there is a syntax error"""


class DanglingReferenceError(RuntimeError):
    """ Raised when a released node is read. Always an interpreter bug, never a Lisp error."""
