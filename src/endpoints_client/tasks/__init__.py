"""Internal tasks of the client-generation pipeline.

Declared by :class:`~endpoints_client.plugin.EndpointsClientPlugin` in this
order, each depending on the previous one:

* :class:`ExtractDiscoveryDocZipsTask` -- unpack discovery doc archives from
  the ``endpointsServer`` configuration.
* :class:`GenerateClientLibrariesTask` -- run the generator once per
  discovery doc.
* :class:`GenerateClientLibrarySourceTask` -- copy the Java sources out of
  the generated client library packages.
"""

from endpoints_client.tasks.extract import ExtractDiscoveryDocZipsTask
from endpoints_client.tasks.generate import GenerateClientLibrariesTask
from endpoints_client.tasks.source import GenerateClientLibrarySourceTask

__all__ = [
    "ExtractDiscoveryDocZipsTask",
    "GenerateClientLibrariesTask",
    "GenerateClientLibrarySourceTask",
]
