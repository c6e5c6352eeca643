from .dependency_analyzer import DependencyAnalyzer
from .project_analyzer import ProjectAnalyzer

__all__ = ['DependencyAnalyzer', 'ProjectAnalyzer']
