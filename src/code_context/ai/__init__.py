from .readiness import GeminiReadinessProbe

__all__ = ['GeminiReadinessProbe']
