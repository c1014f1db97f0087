"""Virtual module — the generated routes module without a file on disk.

``load_virtual_module`` generates the module in memory and registers it in
``sys.modules`` under a fixed name, so the application can import it like a
normal module::

    from fileroutes.codegen import load_virtual_module

    load_virtual_module(RoutesConfig(write=False))
    from generated_routes import register_generated_routes
"""

import dataclasses
import sys
from types import ModuleType

from fileroutes.codegen.generator import generate
from fileroutes.config import RoutesConfig

# Identifier used by dev-server tooling for the in-memory module
VIRTUAL_MODULE_ID = "virtual:generated-routes"

# Import name the module is registered under
VIRTUAL_MODULE_NAME = "generated_routes"


def load_virtual_module(config: RoutesConfig, name: str = VIRTUAL_MODULE_NAME) -> ModuleType:
    """Generate, execute and register the routes module; return it.

    Persistence is always disabled, whatever ``config.write`` says.  Calling
    again replaces the previously registered module.

    Raises:
        RouteLoadError: If a route module fails while the virtual module loads.

    """
    source = generate(dataclasses.replace(config, write=False))
    code = compile(source, f"<{VIRTUAL_MODULE_ID}>", "exec")

    module = ModuleType(name)
    module.__file__ = f"<{VIRTUAL_MODULE_ID}>"
    sys.modules[name] = module
    try:
        exec(code, module.__dict__)  # noqa: S102
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module
