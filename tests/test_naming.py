from typing import Annotated, Optional

from api_schema_synth.schema.naming import canonical_title, ref_name, remove_package_name, type_name
from sample_models import Address, Node, Page


class TestRemovePackageName:
    def test_strips_module(self):
        assert remove_package_name("app.models.User") == "User"

    def test_plain_name(self):
        assert remove_package_name("User") == "User"

    def test_flattens_generic(self):
        assert remove_package_name("app.Page[app.models.User]") == "PageUser"
        assert remove_package_name("app.Page[app.User, builtins.int]") == "PageUserInt"

    def test_idempotent(self):
        once = remove_package_name("app.Page[app.models.User]")
        assert remove_package_name(once) == once


class TestCanonicalTitle:
    def test_class(self):
        assert canonical_title(Node) == "Node"

    def test_generic_instantiations_do_not_collide(self):
        assert canonical_title(Page[Address]) == "PageAddress"
        assert canonical_title(Page[Node]) == "PageNode"
        assert canonical_title(Page[Address]) == canonical_title(Page[Address])

    def test_string_name(self):
        assert canonical_title("sample_models.Node") == "Node"

    def test_type_name_of_alias(self):
        assert type_name(Optional[int]).endswith("]")


class TestRefName:
    def test_pointer(self):
        assert ref_name("User") == "#/components/schemas/User"


class TestWrappedTitles:
    def test_optional_and_annotated_use_inner_title(self):
        assert canonical_title(Optional[Address]) == "Address"
        assert canonical_title(Address | None) == "Address"
        assert canonical_title(Annotated[Optional[Address], "body"]) == "Address"
