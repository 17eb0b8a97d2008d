"""
Template catalog: every source text the generator writes, keyed by name.

File templates end with a newline; snippet templates (registry fragments)
do not, so the injector controls line breaks.
"""

from textwrap import dedent

# Package kind -> directory under packages/
KIND_DIRS = {
    "component": "components",
    "hook": "hooks",
    "util": "utils",
    "store": "stores",
    "context": "context",
    "partial": "partials",
}

# Artifact kind -> [(relative path template, file template, dialect or None)]
# Package paths are relative to packages/<kind dir>, the rest to Roles/<Role>.
ARTIFACT_FILES = {
    "component": [
        ("{{ name }}/{{ name }}.tsx", "component.tsx", None),
        ("{{ name }}/index.ts", "component_index.ts", None),
    ],
    "hook": [("{{ name }}.ts", "hook.ts", None)],
    "util": [("{{ name }}.ts", "util.ts", None)],
    "store": [("{{ name }}.ts", "store.ts", None)],
    "context": [("{{ name }}.tsx", "context.tsx", None)],
    "partial": [("{{ name }}.tsx", "partial.tsx", None)],
    "role": [
        ("routes/route.tsx", "role_marker.tsx", "marker"),
        ("routes/route.tsx", "role_flat.tsx", "flat"),
    ],
    "module": [
        ("modules/{{ segment }}/{{ name }}.tsx", "module.tsx", None),
        ("modules/{{ segment }}/{{ segment }}.route.tsx", "module_route.tsx", "flat"),
    ],
    "page": [("modules/{{ segment }}/pages/{{ name }}.tsx", "page.tsx", None)],
}

FILE_TEMPLATES = {
    "component.tsx": dedent("""\
        export function {{ name }}() {
          return <div>{{ name }}</div>;
        }
    """),
    "component_index.ts": 'export * from "./{{ name }}";\n',
    "hook.ts": dedent("""\
        import { useState } from "react";

        export const {{ name }} = () => {
          const [value, setValue] = useState<unknown>(null);
          return { value, setValue };
        };
    """),
    "util.ts": "export const {{ name }} = () => {};\n",
    "store.ts": dedent("""\
        export const {{ name }} = {
          state: {},
        };
    """),
    "context.tsx": dedent("""\
        import { createContext } from "react";

        export const {{ name }} = createContext<unknown>(null);
    """),
    "partial.tsx": dedent("""\
        export function {{ name }}() {
          return <div>{{ name }}</div>;
        }
    """),
    "role_marker.tsx": dedent("""\
        import { Route } from "react-router-dom";

        export default function {{ registry_symbol }}() {
          return (
            <Route path="/{{ path }}">
                {{ sentinel }}
            </Route>
          );
        }
    """),
    "role_flat.tsx": dedent("""\
        import type { RouteObject } from "react-router-dom";

        export const {{ registry_symbol }}: RouteObject[] = [
        ];
    """),
    "module.tsx": dedent("""\
        import { Outlet } from "react-router-dom";

        export function {{ name }}() {
          return (
            <div>
              <h1>{{ name }} Module</h1>
              <Outlet />
            </div>
          );
        }
    """),
    "module_route.tsx": dedent("""\
        import type { RouteObject } from "react-router-dom";
        import { {{ name }} } from "./{{ name }}";

        export const {{ route_symbol }}: RouteObject = {
          path: "{{ segment }}",
          element: <{{ name }} />,
          children: [
          ],
        };
    """),
    "page.tsx": dedent("""\
        export function {{ name }}() {
          return <div>{{ name }}</div>;
        }
    """),
}

SNIPPET_TEMPLATES = {
    "index_export": 'export * from "./{{ name }}";',
    "named_import": 'import { {{ name }} } from "{{ source }}";',
    "module_sentinel": '{/* PAGE_ROUTES_{{ segment | replace("-", "_") | upper }} */}',
    "module_block": dedent("""\
        <Route path="{{ segment }}" element={<{{ name }} />}>
          {{ sentinel }}
        </Route>"""),
    "page_leaf": '<Route path="{{ segment }}" element={<{{ name }} />} />',
    "flat_entry": "{{ route_symbol }},",
    "flat_page_entry": '{ path: "{{ segment }}", element: <{{ name }} /> },',
}
