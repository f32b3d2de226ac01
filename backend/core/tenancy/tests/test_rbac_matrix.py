from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from tenancy.rbac import (
    ROLE_ADMIN,
    ROLE_CARRIER,
    ROLE_USER,
    get_role_matrix_for_resource,
    join_roles,
    parse_roles,
    resource_capabilities_for_roles,
    roles_can,
    validate_role_overrides_schema,
)


class ParseRolesTests(SimpleTestCase):
    def test_splits_trims_and_drops_empty_entries(self):
        self.assertEqual(parse_roles(" admin, carrier ,,user "), ["admin", "carrier", "user"])

    def test_empty_values(self):
        self.assertEqual(parse_roles(None), [])
        self.assertEqual(parse_roles(""), [])

    def test_join_roles(self):
        self.assertEqual(join_roles(["carrier", " user", ""]), "carrier,user")


class RoleMatrixTests(SimpleTestCase):
    def test_users_resource(self):
        matrix = get_role_matrix_for_resource("users")
        self.assertTrue(roles_can(matrix, [ROLE_CARRIER], "GET"))
        self.assertFalse(roles_can(matrix, [ROLE_USER], "GET"))
        self.assertFalse(roles_can(matrix, [ROLE_CARRIER], "PUT"))
        self.assertTrue(roles_can(matrix, [ROLE_ADMIN], "DELETE"))

    def test_carriers_resource(self):
        matrix = get_role_matrix_for_resource("carriers")
        self.assertTrue(roles_can(matrix, [ROLE_USER], "GET"))
        self.assertFalse(roles_can(matrix, [ROLE_CARRIER], "POST"))
        self.assertTrue(roles_can(matrix, [ROLE_CARRIER], "PUT"))
        self.assertFalse(roles_can(matrix, [ROLE_CARRIER], "DELETE"))

    def test_products_allow_carrier_delete_but_rules_do_not(self):
        self.assertTrue(roles_can(get_role_matrix_for_resource("products"), [ROLE_CARRIER], "DELETE"))
        self.assertFalse(roles_can(get_role_matrix_for_resource("rules"), [ROLE_CARRIER], "DELETE"))

    def test_events_are_admin_only(self):
        matrix = get_role_matrix_for_resource("events")
        self.assertTrue(roles_can(matrix, [ROLE_ADMIN], "GET"))
        self.assertFalse(roles_can(matrix, [ROLE_CARRIER], "GET"))

    def test_capabilities_for_user_role(self):
        caps = resource_capabilities_for_roles(get_role_matrix_for_resource("rules"), [ROLE_USER])
        self.assertTrue(caps["list"])
        self.assertFalse(caps["create"])
        self.assertFalse(caps["delete"])

    @override_settings(ROLE_MATRICES={"rules": {"POST": ["admin", "carrier", "user"]}})
    def test_settings_override_is_applied(self):
        matrix = get_role_matrix_for_resource("rules")
        self.assertTrue(roles_can(matrix, [ROLE_USER], "POST"))

    @override_settings(ROLE_MATRICES={"rules": {"POST": ["superuser"]}})
    def test_invalid_override_is_ignored(self):
        matrix = get_role_matrix_for_resource("rules")
        self.assertFalse(roles_can(matrix, [ROLE_USER], "POST"))
        self.assertTrue(roles_can(matrix, [ROLE_CARRIER], "POST"))


class RoleOverrideSchemaTests(SimpleTestCase):
    def test_accepts_valid_override(self):
        validate_role_overrides_schema({"products": {"DELETE": ["admin"]}})

    def test_rejects_unknown_resource(self):
        with self.assertRaises(ValidationError):
            validate_role_overrides_schema({"policies": {"GET": ["admin"]}})

    def test_rejects_invalid_method_and_roles(self):
        with self.assertRaises(ValidationError):
            validate_role_overrides_schema({"rules": {"FETCH": ["admin"]}})
        with self.assertRaises(ValidationError):
            validate_role_overrides_schema({"rules": {"GET": ["owner"]}})
