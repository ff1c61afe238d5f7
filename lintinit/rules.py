"""Rule-mapping table: translate answer fields into config fragments."""

from lintinit.models import RECOMMENDED, SEVERITY_ERROR, AnswerRecord, ConfigFragment


def map_environment(answers: AnswerRecord) -> ConfigFragment:
    """Map platform answers (es6, env, jsx, react, commonjs).

    Disabled flags leave their key out entirely rather than setting it false.
    """
    fragment = ConfigFragment()
    if answers.es6:
        fragment.env["es6"] = True
    for name in answers.env:
        fragment.env[name] = True
    if answers.commonjs:
        fragment.env["commonjs"] = True
    if answers.jsx:
        fragment.ecma_features["jsx"] = True
        if answers.react:
            fragment.ecma_features["experimentalObjectRestSpread"] = True
            fragment.plugins.append("react")
    return fragment


def map_style(answers: AnswerRecord) -> ConfigFragment:
    """Map the four style answers to error-level rules."""
    return ConfigFragment(
        rules={
            "indent": [SEVERITY_ERROR, answers.indent],
            "quotes": [SEVERITY_ERROR, answers.quotes],
            "linebreak-style": [SEVERITY_ERROR, answers.linebreak],
            "semi": [SEVERITY_ERROR, "always" if answers.semi else "never"],
        }
    )


def map_answers(answers: AnswerRecord) -> ConfigFragment:
    """Build the full prompt-path config, extending eslint:recommended."""
    base = ConfigFragment(extends=RECOMMENDED)
    return base.merge(map_environment(answers)).merge(map_style(answers))
