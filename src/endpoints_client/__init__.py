"""endpoints_client -- Generate Java client libraries from Endpoints discovery documents.

This package orchestrates client-library code generation for an Endpoints
API. Discovery documents are located (authored directly, or extracted from
archives published by an endpoints server project), the Endpoints Framework
tool is invoked once per document, and the generated Java sources are
registered as a compilation source root of the consuming project.

Typical workflow::

    endpoints-client config init                 # write endpoints-client.yaml
    endpoints-client generate -d api/echo.discovery

Modules:
    app: Typer application and CLI entry point.
    plugin: The orchestrator that wires the internal tasks together.
    project: Minimal host model (configurations, source sets, tasks).
    discovery: Discovery document resolution.
    generator: External code generator contract.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
