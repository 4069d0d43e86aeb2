"""Static tables of deprecated Kubernetes APIs.

Tables are ordered tuples so rule application, and therefore report
order, is the same on every run. Add new entries as Kubernetes evolves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ManifestRule:
    """An apiVersion/kind pair removed from the Kubernetes API."""

    api_version: str
    kind: str
    replacement: str
    api_version_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    kind_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: compiled patterns are cached via object.__setattr__
        object.__setattr__(
            self,
            "api_version_pattern",
            re.compile(r"apiVersion:.*" + re.escape(self.api_version)),
        )
        object.__setattr__(
            self,
            "kind_pattern",
            re.compile(r"kind:.*" + re.escape(self.kind)),
        )

    @property
    def message(self) -> str:
        return f"Deprecated API: {self.api_version} {self.kind} → Use {self.replacement}"


@dataclass(frozen=True)
class ImportRule:
    """A Go import path superseded by a stable API package."""

    import_path: str
    replacement: str

    @property
    def needle(self) -> str:
        """Quoted form as it appears in a Go import block."""
        return f'"{self.import_path}"'

    @property
    def message(self) -> str:
        return f"Deprecated import: {self.import_path} → {self.replacement}"


@dataclass(frozen=True)
class UsageRule:
    """A regular expression flagging a deprecated call site."""

    pattern: str
    message: str
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", re.compile(self.pattern))


MANIFEST_RULES: tuple[ManifestRule, ...] = (
    # Removed in K8s 1.16
    ManifestRule("extensions/v1beta1", "Deployment", "apps/v1 (removed in 1.16)"),
    ManifestRule("extensions/v1beta1", "DaemonSet", "apps/v1 (removed in 1.16)"),
    ManifestRule("extensions/v1beta1", "ReplicaSet", "apps/v1 (removed in 1.16)"),
    ManifestRule("extensions/v1beta1", "StatefulSet", "apps/v1 (removed in 1.16)"),
    ManifestRule("extensions/v1beta1", "Ingress", "networking.k8s.io/v1 (removed in 1.22)"),
    ManifestRule("apps/v1beta1", "Deployment", "apps/v1 (removed in 1.16)"),
    ManifestRule("apps/v1beta1", "StatefulSet", "apps/v1 (removed in 1.16)"),
    ManifestRule("apps/v1beta2", "Deployment", "apps/v1 (removed in 1.16)"),
    ManifestRule("apps/v1beta2", "StatefulSet", "apps/v1 (removed in 1.16)"),
    # Removed in K8s 1.22
    ManifestRule(
        "admissionregistration.k8s.io/v1beta1",
        "ValidatingWebhookConfiguration",
        "admissionregistration.k8s.io/v1 (removed in 1.22)",
    ),
    ManifestRule(
        "admissionregistration.k8s.io/v1beta1",
        "MutatingWebhookConfiguration",
        "admissionregistration.k8s.io/v1 (removed in 1.22)",
    ),
    ManifestRule(
        "apiextensions.k8s.io/v1beta1",
        "CustomResourceDefinition",
        "apiextensions.k8s.io/v1 (removed in 1.22)",
    ),
    ManifestRule("networking.k8s.io/v1beta1", "Ingress", "networking.k8s.io/v1 (removed in 1.22)"),
    # Removed in K8s 1.25
    ManifestRule("batch/v1beta1", "CronJob", "batch/v1 (removed in 1.25)"),
    ManifestRule(
        "policy/v1beta1",
        "PodSecurityPolicy",
        "REMOVED - migrate to Pod Security Standards (removed in 1.25)",
    ),
    # Removed in K8s 1.26
    ManifestRule(
        "flowcontrol.apiserver.k8s.io/v1beta1",
        "FlowSchema",
        "flowcontrol.apiserver.k8s.io/v1beta3 (removed in 1.26)",
    ),
    ManifestRule(
        "flowcontrol.apiserver.k8s.io/v1beta1",
        "PriorityLevelConfiguration",
        "flowcontrol.apiserver.k8s.io/v1beta3 (removed in 1.26)",
    ),
    # Removed in K8s 1.27
    ManifestRule("storage.k8s.io/v1beta1", "CSIStorageCapacity", "storage.k8s.io/v1 (removed in 1.27)"),
)

IMPORT_RULES: tuple[ImportRule, ...] = (
    ImportRule("k8s.io/api/extensions/v1beta1", "Use k8s.io/api/apps/v1 or k8s.io/api/networking/v1"),
    ImportRule("k8s.io/api/apps/v1beta1", "Use k8s.io/api/apps/v1"),
    ImportRule("k8s.io/api/apps/v1beta2", "Use k8s.io/api/apps/v1"),
    ImportRule("k8s.io/api/batch/v1beta1", "Use k8s.io/api/batch/v1 (for CronJob)"),
    ImportRule(
        "k8s.io/api/policy/v1beta1",
        "PodSecurityPolicy removed - migrate to Pod Security Standards",
    ),
    ImportRule("k8s.io/api/networking.k8s.io/v1beta1", "Use k8s.io/api/networking/v1"),
    ImportRule("k8s.io/api/apiextensions/v1beta1", "Use k8s.io/api/apiextensions/v1"),
    ImportRule(
        "k8s.io/api/admissionregistration/v1beta1",
        "Use k8s.io/api/admissionregistration/v1",
    ),
)

USAGE_RULES: tuple[UsageRule, ...] = (
    UsageRule(
        r"scheme.AddToScheme.*v1beta1",
        "Deprecated scheme registration using v1beta1 API",
    ),
    UsageRule(
        r"\.ExtensionsV1beta1\(\)|\.AppsV1beta[12]\(\)",
        "Deprecated client usage - use AppsV1() or NetworkingV1()",
    ),
)

RECOMMENDATIONS: tuple[str, ...] = (
    "Review the deprecated APIs listed above",
    "Update apiVersions in manifests to current versions",
    "Update Go imports to use stable API versions",
    "Run tests after making changes",
)

REFERENCES: tuple[tuple[str, str], ...] = (
    (
        "Kubernetes Deprecation Policy",
        "https://kubernetes.io/docs/reference/using-api/deprecation-policy/",
    ),
    (
        "API Migration Guide",
        "https://kubernetes.io/docs/reference/using-api/deprecation-guide/",
    ),
    (
        "Client-go Compatibility",
        "https://github.com/kubernetes/client-go#compatibility-matrix",
    ),
)


__all__ = [
    "IMPORT_RULES",
    "MANIFEST_RULES",
    "RECOMMENDATIONS",
    "REFERENCES",
    "USAGE_RULES",
    "ImportRule",
    "ManifestRule",
    "UsageRule",
]
