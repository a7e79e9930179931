"""Registry of special forms for the copylisp evaluator.

Maps form names to handler functions implementing non-standard evaluation
rules. Each Interpreter interns these names once and dispatches on the
interned text of the head atom, before ordinary function application.

A handler takes (interp, expr, env), where `expr` and `env` are the
evaluator's registered Root slots, and returns a value or a TailCall.
"""

from copylisp.evaluation.special_forms.quote_form import quote_form
from copylisp.evaluation.special_forms.cond_form import cond_form
from copylisp.evaluation.special_forms.begin_form import begin_form
from copylisp.evaluation.special_forms.logic_forms import or_form
from copylisp.evaluation.special_forms.define_form import define_form
from copylisp.evaluation.special_forms.lambda_form import lambda_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "cond": cond_form,
    "begin": begin_form,
    "or": or_form,
    "define": define_form,
    "lambda": lambda_form,
}
