from extcss.stylesheet.model import RuleData, Style
from extcss.stylesheet.normalizer import normalize
from extcss.stylesheet.parser import parse_stylesheet
from extcss.stylesheet.rule_data import prepare_rule_data

__all__ = ["parse_stylesheet", "prepare_rule_data", "normalize", "RuleData", "Style"]
