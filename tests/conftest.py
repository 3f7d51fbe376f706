import copy
import json
import os
import sys

import pytest


def pytest_configure():
    # Ensure the repo root is importable as top-level for `ebsattach.*` imports
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    if root not in sys.path:
        sys.path.insert(0, root)


def make_resource(resource_type: str, primary_id: str, **attributes):
    attrs = {"id": primary_id}
    attrs.update(attributes)
    return {
        "type": resource_type,
        "depends_on": [],
        "primary": {
            "id": primary_id,
            "attributes": attrs,
            "meta": {},
            "tainted": False,
        },
        "deposed": [],
        "provider": "provider.aws",
    }


def make_module(path, resources):
    return {
        "path": path,
        "outputs": {},
        "resources": resources,
        "depends_on": [],
    }


_BASE_STATE = {
    "version": 3,
    "terraform_version": "0.11.14",
    "serial": 7,
    "lineage": "5f1c7e3a-0d2b-4c1e-9a7f-1b2c3d4e5f60",
    "modules": [
        make_module(
            ["root"],
            {
                "aws_ebs_volume.mysrv_dsk0": make_resource(
                    "aws_ebs_volume", "vol-22222222", availability_zone="eu-west-1a", size="100"
                ),
                "aws_instance.mysrv": make_resource(
                    "aws_instance", "i-11111111", ami="ami-12345678", instance_type="t2.micro"
                ),
            },
        ),
    ],
}


@pytest.fixture
def state_data():
    """Estado con un único módulo que contiene aws_instance.mysrv y aws_ebs_volume.mysrv_dsk0."""
    return copy.deepcopy(_BASE_STATE)


@pytest.fixture
def multi_module_state():
    """Estado con tres módulos; solo el 1 contiene foo y bar a la vez."""
    return {
        "version": 3,
        "serial": 1,
        "modules": [
            make_module(["root"], {"aws_instance.foo": make_resource("aws_instance", "i-root")}),
            make_module(
                ["root", "storage"],
                {
                    "aws_instance.foo": make_resource("aws_instance", "i-aaaa1111"),
                    "aws_ebs_volume.bar": make_resource("aws_ebs_volume", "vol-bbbb2222"),
                },
            ),
            make_module(["root", "other"], {"aws_ebs_volume.bar": make_resource("aws_ebs_volume", "vol-other")}),
        ],
    }


@pytest.fixture
def state_file(tmp_path, state_data):
    path = tmp_path / "terraform.tfstate"
    path.write_text(json.dumps(state_data, indent=4) + "\n", encoding="utf-8")
    return path
