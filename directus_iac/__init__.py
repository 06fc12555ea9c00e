"""Declarative resource adapter for the Directus REST API.

To wire everything from the environment:
    from directus_iac.provider import DirectusProvider

    provider = DirectusProvider.from_env()
    role = provider.roles.create(Role(name="Editors"))

To use the client or individual resources:
    from directus_iac.core.directus import DirectusClient
    from directus_iac.core.resources import PolicyResource
"""

__version__ = "0.1.0"
