"""Tests for the public row-level access policy DDL."""

from primeverse.schema.policies import (
    PUBLIC_POLICIES,
    RLS_TABLES,
    AccessPolicy,
    drop_policy_statements,
    policy_statements,
)


class TestAccessPolicy:

    def test_insert_policy_checks_new_rows(self):
        policy = AccessPolicy("payments", "Allow public insert", "INSERT")
        assert policy.create_sql() == (
            'CREATE POLICY "Allow public insert" ON public.payments '
            "FOR INSERT WITH CHECK (true)"
        )

    def test_select_policy_filters_existing_rows(self):
        policy = AccessPolicy("payments", "Allow public select", "SELECT")
        assert policy.create_sql().endswith("FOR SELECT USING (true)")

    def test_drop_is_conditional(self):
        policy = AccessPolicy("contact_logs", "Allow public insert contact logs", "INSERT")
        assert policy.drop_sql() == (
            'DROP POLICY IF EXISTS "Allow public insert contact logs" ON public.contact_logs'
        )


class TestPublicPolicies:

    def test_rls_tables(self):
        assert RLS_TABLES == ["payments", "contact_logs"]

    def test_only_payments_is_publicly_readable(self):
        readable = [p.table for p in PUBLIC_POLICIES if p.command == "SELECT"]
        assert readable == ["payments"]

    def test_both_tables_are_publicly_writable(self):
        writable = sorted(p.table for p in PUBLIC_POLICIES if p.command == "INSERT")
        assert writable == ["contact_logs", "payments"]

    def test_statement_order(self):
        statements = policy_statements()

        assert statements[0] == "ALTER TABLE public.payments ENABLE ROW LEVEL SECURITY"
        assert statements[1].startswith('DROP POLICY IF EXISTS "Allow public insert"')
        assert statements[2].startswith('CREATE POLICY "Allow public insert"')
        assert statements[3].startswith('DROP POLICY IF EXISTS "Allow public select"')
        assert statements[4].startswith('CREATE POLICY "Allow public select"')
        assert statements[5] == "ALTER TABLE public.contact_logs ENABLE ROW LEVEL SECURITY"
        assert len(statements) == 8

    def test_every_create_is_preceded_by_drop(self):
        statements = policy_statements()
        for i, statement in enumerate(statements):
            if statement.startswith("CREATE POLICY"):
                assert statements[i - 1].startswith("DROP POLICY IF EXISTS")

    def test_drop_statements_disable_rls(self):
        statements = drop_policy_statements()
        assert statements[-2:] == [
            "ALTER TABLE public.payments DISABLE ROW LEVEL SECURITY",
            "ALTER TABLE public.contact_logs DISABLE ROW LEVEL SECURITY",
        ]
        assert sum(s.startswith("DROP POLICY IF EXISTS") for s in statements) == 3
