"""Core Logic Module

Maps declarative resource configuration onto Directus REST API calls.

Module Structure:
    - directus/         : Low-level Directus REST client, paths, exceptions
    - models.py         : Config-format dataclasses
    - fields.py         : UNSET sentinel and payload field helpers
    - transformer.py    : Directus ↔ config transformations
    - reconciler.py     : Authoritative many-to-many relation reconciliation
    - resources/        : Per-resource create/read/update/delete/import
    - audit.py          : Signed audit trail of remote writes

Usage Pattern:
    from directus_iac.core.directus import DirectusClient
    from directus_iac.core.models import Policy
    from directus_iac.core.resources import PolicyResource

    policies = PolicyResource(DirectusClient(url, token))
    state = policies.create(Policy(name="Editors", app_access=True))
"""
