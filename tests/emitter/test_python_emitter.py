# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for rendering source trees as Python modules."""

from pathlib import Path, PurePosixPath

import pytest

from asyncapi_codegen.compiler.builder import (
    Decorator,
    MethodInformation,
    Parameter,
    PropertyInformation,
    RawContent,
    TypeCustomization,
    TypeInformation,
    TypeKind,
)
from asyncapi_codegen.compiler.generator import DATA_CLASS
from asyncapi_codegen.compiler.resolver import QualifiedName, TypeExpression
from asyncapi_codegen.compiler.tree import SourceTree
from asyncapi_codegen.emitter.python import (
    WIRE_NAME_KEY,
    GenerationError,
    PythonEmitter,
    python_identifier,
    python_reference,
)
from asyncapi_codegen.emitter.templates import HEADER

# ###############
# Helpers
# ###############

STRING = TypeExpression(QualifiedName.builtin("str"))
PROTOCOL = TypeCustomization(
    kind=TypeKind.INTERFACE,
    bases=(TypeExpression(QualifiedName.external("typing", "Protocol")),),
)


def _render(tree: SourceTree) -> dict[str, str]:
    return {str(path): content for path, content in PythonEmitter().render(tree).items()}


# ###############
# Packages
# ###############


class TestPackages:
    def test_every_package_directory_gets_an_init(self) -> None:
        tree = SourceTree()
        tree.create_builder("com.example.types").create_type(TypeInformation(name="Device"))

        files = _render(tree)
        assert sorted(files) == [
            "com/__init__.py",
            "com/example/__init__.py",
            "com/example/types/__init__.py",
            "com/example/types/device.py",
        ]
        assert files["com/__init__.py"] == f"{HEADER}\n"

    def test_metadata_package(self) -> None:
        tree = SourceTree()
        tree.create_builder("api").set_metadata({"version": "1.0", "title": "Smart Home"})

        assert _render(tree)["api/__init__.py"] == f'{HEADER}\n"""Smart Home"""\n\n__version__ = "1.0"\n'

    def test_metadata_of_root_package(self) -> None:
        tree = SourceTree()
        tree.create_builder("").set_metadata({"version": "2", "title": "API", "description": "All of it."})

        content = _render(tree)["__init__.py"]
        assert '"""API\n\nAll of it.\n"""' in content
        assert '__version__ = "2"' in content


# ###############
# Classes
# ###############


class TestClasses:
    def test_data_class(self) -> None:
        tree = SourceTree()
        device = tree.create_builder("pkg").create_type(TypeInformation(name="Device", summary="A device."), DATA_CLASS)
        device.create_property(PropertyInformation(type=STRING, name="name", summary="Name of the device.", required=True))
        device.create_property(
            PropertyInformation(type=TypeExpression(QualifiedName.builtin("list"), (STRING,)), name="tags")
        )

        assert _render(tree)["pkg/device.py"] == (
            f"{HEADER}\n"
            "\n"
            "from __future__ import annotations\n"
            "\n"
            "import dataclasses\n"
            "\n"
            "\n"
            "@dataclasses.dataclass(kw_only=True)\n"
            "class Device:\n"
            '    """A device."""\n'
            "\n"
            "    name: str\n"
            '    """Name of the device."""\n'
            "    tags: list[str] | None = None\n"
        )

    def test_empty_class(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_type(TypeInformation(name="Empty"))
        assert "class Empty:\n    pass\n" in _render(tree)["pkg/empty.py"]

    def test_generated_references_are_imported_for_type_checking(self) -> None:
        tree = SourceTree()
        room = tree.create_builder("pkg.rooms").create_type(TypeInformation(name="Room"))
        room.create_property(
            PropertyInformation(type=TypeExpression(QualifiedName(package="pkg.devices", name="SmartDevice")), name="device")
        )

        content = _render(tree)["pkg/rooms/room.py"]
        assert "import typing\n" in content
        assert "if typing.TYPE_CHECKING:\n    import pkg.devices.smart_device\n" in content
        assert "device: pkg.devices.smart_device.SmartDevice | None = None" in content

    def test_same_module_references_are_local(self) -> None:
        tree = SourceTree()
        device = tree.create_builder("pkg").create_type(TypeInformation(name="Device"))
        location = device.create_type(TypeInformation(name="Location"))
        device.create_property(PropertyInformation(type=TypeExpression(location.qualified_name), name="location"))

        content = _render(tree)["pkg/device.py"]
        assert "    class Location:\n        pass\n" in content
        assert "    location: Device.Location | None = None" in content
        assert "TYPE_CHECKING" not in content

    def test_interface_with_methods(self) -> None:
        tree = SourceTree()
        service = tree.create_builder("pkg").create_type(TypeInformation(name="Devices"), PROTOCOL)
        service.create_method(
            MethodInformation(
                name="eventSensorUpdate",
                return_type=TypeExpression(
                    QualifiedName.external("asyncapi_codegen.runtime", "Publish"),
                    (TypeExpression(QualifiedName(package="pkg.messages", name="SensorUpdate")),),
                ),
                summary="Topic 'devices.1.event.sensor.update'.",
            )
        )
        service.create_method(
            MethodInformation(
                name="latest",
                return_type=STRING,
                parameters=(Parameter(name="class", type=STRING),),
                body=("return 'x'",),
                decorators=(Decorator(QualifiedName.external("functools", "cache")),),
            )
        )

        content = _render(tree)["pkg/devices.py"]
        assert "import functools\nimport typing\n" in content
        assert "    import asyncapi_codegen.runtime\n    import pkg.messages.sensor_update\n" in content
        assert "class Devices(typing.Protocol):\n" in content
        assert (
            "    def eventSensorUpdate(self) -> asyncapi_codegen.runtime.Publish[pkg.messages.sensor_update.SensorUpdate]:\n"
            "        \"\"\"Topic 'devices.1.event.sensor.update'.\"\"\"\n"
            "        ...\n"
        ) in content
        assert "    @functools.cache\n    def latest(self, class_: str) -> str:\n        return 'x'\n" in content

    def test_delegation_uses_python_names(self) -> None:
        """Delegating methods call their targets under the same names they are declared with."""
        tree = SourceTree()
        client = tree.create_builder("pkg").create_type(TypeInformation(name="Client"), PROTOCOL)
        client.create_method(MethodInformation(name="class", return_type=STRING, delegate_to=("v1", "class")))
        client.create_method(MethodInformation(name="3D", return_type=STRING, delegate_to=("v1", "3D")))

        content = _render(tree)["pkg/client.py"]
        assert "    def class_(self) -> str:\n        return self.v1().class_()\n" in content
        assert "    def _3D(self) -> str:\n        return self.v1()._3D()\n" in content

    def test_raw_content_imports_at_runtime(self) -> None:
        tree = SourceTree()
        holder = tree.create_builder("pkg").create_type(TypeInformation(name="Holder"))
        holder.create_body_content(
            RawContent(
                lines=("TARGET = pkg.other.Target",),
                references=(QualifiedName(package="pkg", name="Target", enclosing=()),),
            )
        )

        content = _render(tree)["pkg/holder.py"]
        assert "import pkg.target\n" in content
        assert "    TARGET = pkg.other.Target" in content


# ###############
# Enumerations
# ###############


class TestEnums:
    def test_enum_module(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_enum(TypeInformation(name="Mode", summary="Operating mode."), ["on", "stand-by"])

        content = _render(tree)["pkg/mode.py"]
        assert "import enum\n" in content
        assert 'class Mode(enum.Enum):\n    """Operating mode."""\n\n    ON = "ON"\n    STAND_BY = "STAND_BY"\n' in content
        assert "wire_name" not in content

    def test_wire_names(self) -> None:
        def customizer(literal, node) -> None:
            node.metadata[WIRE_NAME_KEY] = literal

        tree = SourceTree()
        tree.create_builder("pkg").create_enum(TypeInformation(name="Mode"), ["on", "stand-by"], customizer)

        content = _render(tree)["pkg/mode.py"]
        assert 'return {"ON": "on", "STAND_BY": "stand-by"}[self.name]' in content
        assert "def from_wire(cls, value: str) -> Mode:" in content

    def test_keyword_literal(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_enum(TypeInformation(name="Flag"), ["none"], keep_original_literal_value=True)
        assert '    NONE = "none"\n' in _render(tree)["pkg/flag.py"]


# ###############
# Collisions
# ###############


class TestCollisions:
    def test_two_types_in_one_module(self) -> None:
        tree = SourceTree()
        builder = tree.create_builder("pkg")
        builder.create_type(TypeInformation(name="FooBar"))
        builder.create_type(TypeInformation(name="Foo_Bar"))

        with pytest.raises(GenerationError, match="collides"):
            PythonEmitter().render(tree)

    def test_module_and_package_of_same_name(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg.client").create_type(TypeInformation(name="Service"))
        tree.create_builder("pkg").create_type(TypeInformation(name="Client"))

        with pytest.raises(GenerationError, match="package directory"):
            PythonEmitter().render(tree)

    def test_invalid_type_name(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_type(TypeInformation(name="Bad-Name"))

        with pytest.raises(GenerationError, match="not a valid Python identifier"):
            PythonEmitter().render(tree)


# ###############
# Writing
# ###############


class TestWrite:
    def test_writes_all_files(self, tmp_path: Path) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_type(TypeInformation(name="Device"))

        written = PythonEmitter().write(tree, tmp_path)

        assert written == [tmp_path / "pkg" / "__init__.py", tmp_path / "pkg" / "device.py"]
        assert (tmp_path / "pkg" / "device.py").read_text(encoding="utf-8").startswith(HEADER)

    def test_unencodable_content(self, tmp_path: Path) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_type(TypeInformation(name="Device", summary="Température"))

        with pytest.raises(GenerationError, match="ascii"):
            PythonEmitter("ascii").write(tree, tmp_path)

    def test_render_keys_are_relative(self) -> None:
        tree = SourceTree()
        tree.create_builder("pkg").create_type(TypeInformation(name="Device"))
        assert PurePosixPath("pkg/device.py") in PythonEmitter().render(tree)


# ###############
# Identifiers
# ###############


@pytest.mark.parametrize(
    ("name", "expected"),
    [("device", "device"), ("class", "class_"), ("1st", "_1st"), ("None", "None_")],
)
def test_python_identifier(name: str, expected: str) -> None:
    assert python_identifier(name) == expected


@pytest.mark.parametrize("name", ["", "a-b", "a b"])
def test_invalid_python_identifier(name: str) -> None:
    with pytest.raises(GenerationError):
        python_identifier(name)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (QualifiedName.builtin("int"), "int"),
        (QualifiedName.external("datetime", "datetime"), "datetime.datetime"),
        (QualifiedName(package="pkg.messages", name="2FaRequest"), "pkg.messages._2_fa_request._2FaRequest"),
        (QualifiedName(package="pkg", name="Kind", enclosing=("Class",)), "pkg.class_.Class.Kind"),
    ],
)
def test_python_reference(name: QualifiedName, expected: str) -> None:
    assert python_reference(name) == expected
