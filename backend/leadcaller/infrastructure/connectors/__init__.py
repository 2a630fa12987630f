"""
Connectors Package
Outbound integrations with SMS and CRM providers.
"""
