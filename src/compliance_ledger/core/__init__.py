"""Core domain layer: models, validation rules, services, and the registry facade.

Modules:
- models: immutable domain records and the call context
- rules: pure validation and derivation rules
- interfaces: store protocols the services depend on
- services: access control, frameworks, compliance records, violations, verification
- registry: the ComplianceRegistry facade and create_registry factory
"""
