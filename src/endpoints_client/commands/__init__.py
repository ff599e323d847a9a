"""Built-in CLI sub-commands for endpoints_client.

* :mod:`~endpoints_client.commands.generate` -- ``generate``, ``tasks`` and
  ``docs``: run and inspect the client generation pipeline.
* :mod:`~endpoints_client.commands.config` -- ``config show`` / ``config
  init``: view the effective settings and write a starter config file.
"""
