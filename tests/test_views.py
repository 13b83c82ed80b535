from decimal import Decimal

from mortgage_calc.views import group_by_year, loan_year


def test_loan_year_boundaries():
    assert loan_year(1) == 1
    assert loan_year(12) == 1
    assert loan_year(13) == 2
    assert loan_year(360) == 30


class TestGroupByYear:
    def test_one_group_per_year(self, standard_result):
        groups = group_by_year(standard_result.schedule)
        assert [g.year for g in groups] == list(range(1, 31))
        assert all(len(g.payments) == 12 for g in groups)

    def test_group_totals(self, standard_result):
        first = group_by_year(standard_result.schedule)[0]
        members = standard_result.schedule[:12]
        assert first.total_payment == sum(r.payment_amount for r in members)
        assert first.total_principal == sum(r.principal_portion for r in members)
        assert first.total_interest == sum(r.interest_portion for r in members)
        assert first.ending_balance == members[-1].remaining_balance

    def test_last_group_ends_at_zero(self, standard_result):
        assert group_by_year(standard_result.schedule)[-1].ending_balance == 0

    def test_partial_year(self, standard_result):
        groups = group_by_year(standard_result.schedule[:18])
        assert len(groups) == 2
        assert len(groups[1].payments) == 6
        assert groups[1].ending_balance == standard_result.schedule[17].remaining_balance

    def test_year_totals_add_up_to_summary(self, standard_result):
        groups = group_by_year(standard_result.schedule)
        interest = sum(g.total_interest for g in groups)
        assert abs(interest - standard_result.summary.total_interest) < Decimal("0.01")

    def test_does_not_mutate_schedule(self, standard_result):
        before = list(standard_result.schedule)
        group_by_year(standard_result.schedule)
        assert standard_result.schedule == before

    def test_empty_schedule(self):
        assert group_by_year([]) == []
