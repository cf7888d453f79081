"""Point System package.

Feature modules (devices, punches, workdays, payroll, ...) follow the same
layout: a pure model, a repository Protocol, a MySQL repository and a service.
A thin Flask controller layer exposes the services as JSON endpoints.
"""
