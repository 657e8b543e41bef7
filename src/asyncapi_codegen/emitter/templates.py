# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Jinja2 templates of the generated Python sources."""

HEADER = "# Generated by asyncapi-codegen. Do not edit."

TEMPLATES: dict[str, str] = {
    "module.py.j2": """\
{{ header }}

from __future__ import annotations
{% if runtime_imports %}

{% for module in runtime_imports %}
import {{ module }}
{% endfor %}
{% endif %}
{% if checking_imports %}

if typing.TYPE_CHECKING:
{% for module in checking_imports %}
    import {{ module }}
{% endfor %}
{% endif %}


{{ declaration }}
""",
    "package.py.j2": """\
{{ header }}
{% if docstring %}
{{ docstring }}
{% endif %}
{% if version %}

__version__ = {{ version }}
{% endif %}
""",
    "class.py.j2": """\
{% for decorator in decorators %}
@{{ decorator }}
{% endfor %}
class {{ name }}{% if bases %}({{ bases | join(", ") }}){% endif %}:
{% if docstring %}
    {{ docstring | indent(4) }}
{% elif not blocks %}
    pass
{% endif %}
{% for block in blocks %}
{% if docstring or not loop.first %}

{% endif %}
    {{ block | indent(4) }}
{% endfor %}
""",
    "enum.py.j2": """\
class {{ name }}(enum.Enum):
{% if docstring %}
    {{ docstring | indent(4) }}
{% elif not literals %}
    pass
{% endif %}
{% if literals %}
{% if docstring %}

{% endif %}
{% for literal in literals %}
    {{ literal.name }} = {{ literal.value }}
{% endfor %}
{% endif %}
{% if wire_names %}

    @property
    def wire_name(self) -> str:
        \"\"\"Name of the literal in JSON documents.\"\"\"
        return {{ wire_names }}[self.name]

    @classmethod
    def from_wire(cls, value: str) -> {{ name }}:
        \"\"\"Return the literal with the given JSON name.\"\"\"
        for member in cls:
            if member.wire_name == value:
                return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__} wire name")
{% endif %}
""",
    "field.py.j2": """\
{% if required %}
{{ name }}: {{ type }}
{% else %}
{{ name }}: {{ type }} | None = None
{% endif %}
{% if docstring %}
{{ docstring }}
{% endif %}
""",
    "method.py.j2": """\
{% for decorator in decorators %}
@{{ decorator }}
{% endfor %}
def {{ name }}(self{% for parameter in parameters %}, {{ parameter }}{% endfor %}){% if return_type %} -> {{ return_type }}{% endif %}:
{% if docstring %}
    {{ docstring | indent(4) }}
{% endif %}
{% if body %}
{% for line in body %}
    {{ line }}
{% endfor %}
{% else %}
    ...
{% endif %}
""",
}
