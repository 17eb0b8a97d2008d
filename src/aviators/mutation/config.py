"""
Anchors and tokens shared by the injector, the remover and the registry
mutator.
"""

# Literal token that begins a file's default-export statement.
EXPORT_ANCHOR = "export default"

# Root sentinel of a marker-dialect registry.
ROOT_SENTINEL = "{/* MODULE_ROUTES */}"

# Structural tag whose blocks are tracked by depth counting.
ROUTE_TAG = "Route"

# Indentation added below an array-head anchor for new elements.
ARRAY_ELEMENT_INDENT = "  "

# Import paths, relative to the file being mutated.
MODULE_IMPORT_TEMPLATE = "../modules/{segment}/{name}"
PAGE_IMPORT_TEMPLATE = "../modules/{segment}/pages/{name}"
MODULE_ROUTE_IMPORT_TEMPLATE = "../modules/{segment}/{segment}.route"
FLAT_PAGE_IMPORT_TEMPLATE = "./pages/{name}"
