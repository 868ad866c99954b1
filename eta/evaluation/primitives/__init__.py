"""Registry of primitives for the Eta evaluator.

Maps reserved atom names to handler functions. Every handler receives its
argument list unevaluated, together with the environment, the memory manager
and the evaluator, and decides for itself what to evaluate and when.
"""

from eta.evaluation.primitives.quote_form import quote_form
from eta.evaluation.primitives.list_forms import atom_form, eq_form, car_form, cdr_form, cons_form
from eta.evaluation.primitives.cond_form import cond_form
from eta.evaluation.primitives.set_form import set_form
from eta.evaluation.primitives.env_form import env_form
from eta.evaluation.primitives.lambda_form import lambda_form
from eta.evaluation.primitives.defmacro_form import defmacro_form
from eta.evaluation.primitives import arithmetic

PRIMITIVES = {
    "quote": quote_form,
    "atom": atom_form,
    "eq": eq_form,
    "car": car_form,
    "cdr": cdr_form,
    "cons": cons_form,
    "cond": cond_form,
    "set": set_form,
    "env": env_form,
    "lambda": lambda_form,
    "defmacro": defmacro_form,
}

MATH_PRIMITIVES = {
    "+": arithmetic.add,
    "-": arithmetic.sub,
    "*": arithmetic.mul,
    "/": arithmetic.divide,
    "%": arithmetic.mod,
    "=": arithmetic.equal,
    ">": arithmetic.gt,
    ">=": arithmetic.gte,
    "<": arithmetic.lt,
    "<=": arithmetic.lte,
}
