"""Registry of special forms for the Wisp evaluator.

Maps names to handler functions that implement non-standard evaluation rules.
Handlers take the *unevaluated* argument forms and the caller's environment.
The builtin table marks these entries as special so the evaluator skips
argument evaluation for them.
"""

from wisp.evaluation.special_forms.define_form import define_form, defun_form
from wisp.evaluation.special_forms.if_form import if_form
from wisp.evaluation.special_forms.lambda_form import lambda_form
from wisp.evaluation.special_forms.loop_forms import for_form, while_form
from wisp.evaluation.special_forms.progn_form import do_form, scope_form
from wisp.evaluation.special_forms.quote_forms import quote_form

SPECIAL_FORMS = {
    "do": do_form,
    "if": if_form,
    "scope": scope_form,
    "quote": quote_form,
    "defun": defun_form,
    "define": define_form,
    "lambda": lambda_form,
    "for": for_form,
    "while": while_form,
}
