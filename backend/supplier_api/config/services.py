"""
Service categories offered in the directory.

SERVICE_SLUG_MAP is the single source of truth for turning URL slugs and
free-form service names into the canonical values stored on vendors and leads.
"""
from __future__ import annotations

SERVICES = {
    "photocopiers": {
        "name": "Photocopiers",
        "slug": "photocopiers",
        "description": "Office multifunction printers, copiers, managed print services",
        "keywords": ["copier", "printer", "MFP", "print", "copy", "scan", "fax", "multifunction"],
    },
    "telecoms": {
        "name": "Telecoms",
        "slug": "telecoms",
        "description": "Business phone systems, VoIP, unified communications",
        "keywords": ["phone", "voip", "pbx", "telephone", "communications", "calls", "unified communications"],
    },
    "cctv": {
        "name": "CCTV",
        "slug": "cctv",
        "description": "Security cameras, video surveillance, monitoring systems",
        "keywords": ["camera", "surveillance", "security", "monitoring", "video", "recording"],
    },
    "it": {
        "name": "IT Services",
        "slug": "it",
        "description": "Managed IT services, support, infrastructure, cloud solutions",
        "keywords": ["it", "support", "network", "computer", "server", "cloud", "managed services"],
    },
    "security": {
        "name": "Security Systems",
        "slug": "security",
        "description": "Access control, alarms, intruder detection, physical security",
        "keywords": ["alarm", "access", "intruder", "security", "door", "access control"],
    },
    "software": {
        "name": "Business Software",
        "slug": "software",
        "description": "Enterprise software, document management, workflow automation",
        "keywords": ["software", "application", "document", "workflow", "erp", "automation"],
    },
}

# Canonical values stored on vendor.services and lead.service
VALID_SERVICES = ("CCTV", "Photocopiers", "IT", "Telecoms", "Security", "Software")

SERVICE_SLUG_MAP = {
    "photocopiers": "Photocopiers",
    "copiers": "Photocopiers",
    "printers": "Photocopiers",
    "telecoms": "Telecoms",
    "phones": "Telecoms",
    "voip": "Telecoms",
    "cctv": "CCTV",
    "security-cameras": "CCTV",
    "it": "IT",
    "it-services": "IT",
    "security": "Security",
    "security-systems": "Security",
    "software": "Software",
}


def get_service_from_slug(slug: str | None) -> str | None:
    """Canonical service name for a slug, or None if unknown."""
    if not slug:
        return None
    return SERVICE_SLUG_MAP.get(slug.strip().lower())
