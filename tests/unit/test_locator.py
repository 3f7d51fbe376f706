import pytest

from ebsattach.core.errors import ResourceNotFoundError, StateStructureError
from ebsattach.core.state import StateDocument, locate

from conftest import make_module, make_resource


def _doc(modules):
    return StateDocument.model_validate({"modules": modules})


def test_locate_single_module(state_data):
    location = locate(StateDocument.model_validate(state_data), "mysrv", "mysrv_dsk0")

    assert location.module_index == 0
    assert location.instance_id == "i-11111111"
    assert location.volume_id == "vol-22222222"


def test_locate_skips_modules_with_only_one_resource(multi_module_state):
    location = locate(StateDocument.model_validate(multi_module_state), "foo", "bar")

    assert location.module_index == 1
    assert location.instance_id == "i-aaaa1111"
    assert location.volume_id == "vol-bbbb2222"


@pytest.mark.parametrize("k", [0, 2, 4])
def test_locate_returns_module_k_of_n(k):
    modules = [make_module(["root", f"m{i}"], {}) for i in range(5)]
    modules[k] = make_module(
        ["root", f"m{k}"],
        {
            "aws_instance.foo": make_resource("aws_instance", "i-k"),
            "aws_ebs_volume.bar": make_resource("aws_ebs_volume", "vol-k"),
        },
    )
    assert locate(_doc(modules), "foo", "bar").module_index == k


def test_locate_first_match_wins():
    def both(suffix):
        return make_module(
            ["root", suffix],
            {
                "aws_instance.foo": make_resource("aws_instance", f"i-{suffix}"),
                "aws_ebs_volume.bar": make_resource("aws_ebs_volume", f"vol-{suffix}"),
            },
        )

    location = locate(_doc([make_module(["root"], {}), both("first"), both("second")]), "foo", "bar")

    assert location.module_index == 1
    assert location.instance_id == "i-first"


def test_locate_not_found_when_split_across_modules():
    modules = [
        make_module(["root"], {"aws_instance.foo": make_resource("aws_instance", "i-1")}),
        make_module(["root", "b"], {"aws_ebs_volume.bar": make_resource("aws_ebs_volume", "vol-1")}),
    ]
    with pytest.raises(ResourceNotFoundError) as exc:
        locate(_doc(modules), "foo", "bar")

    assert exc.value.instance_key == "aws_instance.foo"
    assert exc.value.volume_key == "aws_ebs_volume.bar"
    assert "aws_instance.foo" in str(exc.value)
    assert "aws_ebs_volume.bar" in str(exc.value)


def test_locate_not_found_in_empty_document():
    with pytest.raises(ResourceNotFoundError):
        locate(_doc([]), "foo", "bar")


def test_locate_resource_without_primary():
    instance = make_resource("aws_instance", "i-1")
    del instance["primary"]
    modules = [
        make_module(
            ["root"],
            {"aws_instance.foo": instance, "aws_ebs_volume.bar": make_resource("aws_ebs_volume", "vol-1")},
        )
    ]
    with pytest.raises(StateStructureError):
        locate(_doc(modules), "foo", "bar")
