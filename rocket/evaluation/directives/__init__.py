"""Registry of built-in directives for the Rocket evaluator.

Maps directive names (without the leading ':') to handler functions. The
evaluator consults this table before any user definition, so user code
cannot shadow a built-in.
"""

from rocket.evaluation.directives.null_form import null_form
from rocket.evaluation.directives.let_form import let_form
from rocket.evaluation.directives.version_form import version_form
from rocket.evaluation.directives.concat_form import concat_form
from rocket.evaluation.directives.md_form import md_form
from rocket.evaluation.directives.definition_list_forms import definition_list_form, glossary_form
from rocket.evaluation.directives.theme_config_form import theme_config_form
from rocket.evaluation.directives.define_forms import define_form, define_template_form
from rocket.evaluation.directives.include_forms import include_form, import_form
from rocket.evaluation.directives.admonition_forms import note_form, warning_form
from rocket.evaluation.directives.logic_forms import if_form, not_form, equals_form, not_equals_form
from rocket.evaluation.directives.formatting_forms import (
    em_form,
    link_form,
    ol_form,
    steps_form,
    strong_form,
    ul_form,
)
from rocket.evaluation.directives.heading_forms import HEADINGS

DIRECTIVES = {
    "null": null_form,
    "table": null_form,
    "let": let_form,
    "version": version_form,
    "concat": concat_form,
    "md": md_form,
    "definition-list": definition_list_form,
    "glossary": glossary_form,
    "theme-config": theme_config_form,
    "define": define_form,
    "define-template": define_template_form,
    "include": include_form,
    "import": import_form,
    "note": note_form,
    "warning": warning_form,
    "if": if_form,
    "not": not_form,
    "=": equals_form,
    "!=": not_equals_form,
    "strong": strong_form,
    "em": em_form,
    "link": link_form,
    "ul": ul_form,
    "ol": ol_form,
    "steps": steps_form,
    **HEADINGS,
}
