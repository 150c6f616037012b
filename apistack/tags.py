"""
Labeling utilities for consistent descriptor labels across deployments.
"""

import re
from typing import Dict, List, Optional

MANAGED_BY = "apistack"

# RFC 1123 label: what Kubernetes accepts for object names
DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
DNS_LABEL_MAX = 63


def is_dns_label(value: str) -> bool:
    return len(value) <= DNS_LABEL_MAX and bool(DNS_LABEL.match(value))


def base_labels(app: str, namespace: str, deployment_id: Optional[str] = None,
                extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Generate base labels for every descriptor of a deployment.

    Args:
        app: Deployment (API) name
        namespace: Target namespace
        deployment_id: Optional deployment ID
        extra: Additional labels to include

    Returns:
        Dictionary of labels to apply to descriptors
    """
    labels = dict(extra or {})

    # base keys are applied last: the service selector relies on "app"
    labels.update({
        "app": app,
        "managed-by": MANAGED_BY,
        "namespace": namespace,
    })
    if deployment_id:
        labels["deployment-id"] = deployment_id

    return labels


def parse_labels(label_strings: List[str]) -> Dict[str, str]:
    """
    Parse user-provided label strings in format "key=value".

    Raises:
        ValueError: If a label string format is invalid
    """
    labels = {}

    for label_str in label_strings:
        if "=" not in label_str:
            raise ValueError(f"Invalid label format: {label_str}. Expected 'key=value'")

        key, value = label_str.split("=", 1)
        if not key.strip() or not value.strip():
            raise ValueError(f"Invalid label format: {label_str}. Key and value must not be empty")

        labels[key.strip()] = value.strip()

    return labels


def is_managed(labels: Dict[str, str]) -> bool:
    """Check whether a descriptor's labels mark it as produced by this package."""
    return labels.get("managed-by") == MANAGED_BY
