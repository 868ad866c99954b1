from eta.types.environment import Environment
from eta.evaluation.primitives import PRIMITIVES, MATH_PRIMITIVES


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Install the primitive library followed by the math library.

    Bindings are prepended, so the math library ends up in front.
    """
    for name, fn in PRIMITIVES.items():
        env.define_primitive(name, fn)
    for name, fn in MATH_PRIMITIVES.items():
        env.define_primitive(name, fn)
