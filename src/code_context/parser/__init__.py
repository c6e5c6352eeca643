from .language_detector import detect_language, detect_project_language
from .manifest_parser import parse_go_mod, parse_package_json, parse_requirements

__all__ = ['detect_language', 'detect_project_language', 'parse_go_mod', 'parse_package_json', 'parse_requirements']
