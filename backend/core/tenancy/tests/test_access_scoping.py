from django.test import SimpleTestCase, TestCase

from accounts.models import User
from carriers.models import Carrier
from tenancy.access import AccessContext, access_context_for_user, scope_queryset, validate_carrier_access
from tenancy.exceptions import AccessDenied, InvalidCredentials


class ValidateCarrierAccessTests(SimpleTestCase):
    def test_admin_passes_for_any_carrier(self):
        validate_carrier_access(AccessContext(user_id="usr-admin", roles=("admin",)), 99)

    def test_user_without_carrier_is_denied(self):
        access = AccessContext(user_id="usr-1", roles=("carrier",), carrier_id=None)
        with self.assertRaisesMessage(AccessDenied, "User not associated with any carrier"):
            validate_carrier_access(access, 1)

    def test_other_carrier_is_denied(self):
        access = AccessContext(user_id="usr-1", roles=("user",), carrier_id=1)
        with self.assertRaisesMessage(AccessDenied, "Access denied to other carrier's data"):
            validate_carrier_access(access, 2)

    def test_unowned_record_is_denied_for_non_admin(self):
        access = AccessContext(user_id="usr-1", roles=("carrier",), carrier_id=1)
        with self.assertRaises(AccessDenied):
            validate_carrier_access(access, None)

    def test_same_carrier_passes(self):
        validate_carrier_access(AccessContext(user_id="usr-1", roles=("user",), carrier_id=3), 3)


class ScopeQuerysetTests(TestCase):
    def setUp(self):
        self.carrier_a = Carrier.objects.create(legal_name="Alpha Mutual", display_name="Alpha")
        self.carrier_b = Carrier.objects.create(legal_name="Beta Insurance", display_name="Beta")

    def test_admin_sees_everything(self):
        access = AccessContext(user_id="usr-admin", roles=("admin",))
        self.assertEqual(scope_queryset(Carrier.objects.all(), access).count(), 2)

    def test_carrier_member_sees_own_carrier(self):
        access = AccessContext(user_id="usr-1", roles=("user",), carrier_id=self.carrier_b.carrier_id)
        scoped = scope_queryset(Carrier.objects.all(), access)
        self.assertEqual(list(scoped), [self.carrier_b])

    def test_member_without_carrier_sees_nothing(self):
        access = AccessContext(user_id="usr-1", roles=("carrier",))
        self.assertFalse(scope_queryset(Carrier.objects.all(), access).exists())


class AccessContextForUserTests(TestCase):
    def test_reloads_roles_from_database(self):
        carrier = Carrier.objects.create(legal_name="Alpha Mutual", display_name="Alpha")
        user = User.objects.create_user(
            email="ana@alpha.test",
            password="pass-123",
            name="Ana",
            roles="user",
            carrier=carrier,
        )
        User.objects.filter(pk=user.pk).update(roles="carrier")

        access = access_context_for_user(user)

        self.assertEqual(access.roles, ("carrier",))
        self.assertEqual(access.carrier_id, carrier.carrier_id)
        self.assertTrue(access.is_carrier_admin)

    def test_deleted_user_is_rejected(self):
        user = User.objects.create_user(email="gone@alpha.test", password="pass-123", name="Gone")
        User.objects.filter(pk=user.pk).delete()
        with self.assertRaises(InvalidCredentials):
            access_context_for_user(user)
