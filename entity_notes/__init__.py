"""Entity notes service: audited entity models and a GraphQL read API.

Every save of a Job, Property, Supplier or Contact writes an audit Note
describing what changed and who changed it.
"""
