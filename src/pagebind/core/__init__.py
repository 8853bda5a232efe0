"""Declarative content binding: path resolution, image expansion, injection."""

from pagebind.core.images import ImageReference, expand
from pagebind.core.injector import Diagnostic, InjectionPlan, Write, apply, inject, plan
from pagebind.core.loader import ContentLoader, LoaderConfig
from pagebind.core.paths import ABSENT, resolve
from pagebind.core.routing import PageRoutes

__all__ = [
    "ABSENT",
    "ContentLoader",
    "Diagnostic",
    "ImageReference",
    "InjectionPlan",
    "LoaderConfig",
    "PageRoutes",
    "Write",
    "apply",
    "expand",
    "inject",
    "plan",
    "resolve",
]
