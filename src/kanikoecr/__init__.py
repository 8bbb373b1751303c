"""
kaniko-ecr - build container images with kaniko and push them to AWS ECR
"""

__version__ = "1.0.0"

from .core import KanikoECRPlugin, PluginError

__all__ = ["KanikoECRPlugin", "PluginError"]
