"""Tests for job list helpers: stats, active filter, sorting, pagination."""

import pytest

from bizdash.core.schemas import Job
from bizdash.pipeline.jobs import active_jobs, job_stats, paginate, sort_jobs


def _job(id: str, *, status: str = "active", created_at: int = 0) -> Job:
    return Job(id=id, job_name=f"Job {id}", status=status, created_at=created_at)  # type: ignore[arg-type]


class TestJobStats:
    def test_counts(self) -> None:
        jobs = [_job("1"), _job("2", status="pending"), _job("3"), _job("4", status="complete")]
        stats = job_stats(jobs)
        assert stats.total_jobs == 4
        assert stats.active_jobs == 2

    def test_empty(self) -> None:
        stats = job_stats([])
        assert stats.total_jobs == 0
        assert stats.active_jobs == 0


class TestActiveJobs:
    def test_keeps_order(self) -> None:
        jobs = [_job("1"), _job("2", status="inactive"), _job("3")]
        assert [j.id for j in active_jobs(jobs)] == ["1", "3"]


class TestSortJobs:
    def test_date_asc(self) -> None:
        jobs = [_job("a", created_at=30), _job("b", created_at=10), _job("c", created_at=20)]
        assert [j.id for j in sort_jobs(jobs, "date-asc")] == ["b", "c", "a"]

    def test_date_desc(self) -> None:
        jobs = [_job("a", created_at=30), _job("b", created_at=10), _job("c", created_at=20)]
        assert [j.id for j in sort_jobs(jobs, "date-desc")] == ["a", "c", "b"]

    def test_status_stable(self) -> None:
        jobs = [
            _job("1", status="pending"),
            _job("2", status="active"),
            _job("3", status="complete"),
            _job("4", status="active"),
        ]
        assert [j.id for j in sort_jobs(jobs, "status")] == ["2", "4", "3", "1"]

    def test_input_unchanged(self) -> None:
        jobs = [_job("a", created_at=2), _job("b", created_at=1)]
        sort_jobs(jobs, "date-asc")
        assert [j.id for j in jobs] == ["a", "b"]

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="sort mode"):
            sort_jobs([], "name")


class TestPaginate:
    def test_first_page(self) -> None:
        jobs = [_job(str(i)) for i in range(14)]
        page = paginate(jobs, 1)
        assert page.total_pages == 3
        assert [j.id for j in page.items] == ["0", "1", "2", "3", "4", "5"]

    def test_last_partial_page(self) -> None:
        jobs = [_job(str(i)) for i in range(14)]
        page = paginate(jobs, 3)
        assert [j.id for j in page.items] == ["12", "13"]

    def test_exact_multiple(self) -> None:
        page = paginate([_job(str(i)) for i in range(12)], 2)
        assert page.total_pages == 2
        assert len(page.items) == 6

    def test_page_clamped(self) -> None:
        jobs = [_job(str(i)) for i in range(7)]
        assert paginate(jobs, 0).page == 1
        high = paginate(jobs, 9)
        assert high.page == 2
        assert [j.id for j in high.items] == ["6"]

    def test_empty_list_single_page(self) -> None:
        page = paginate([], 1)
        assert page.page == 1
        assert page.total_pages == 1
        assert page.items == []

    def test_custom_per_page(self) -> None:
        page = paginate([_job(str(i)) for i in range(5)], 2, per_page=2)
        assert page.per_page == 2
        assert page.total_pages == 3
        assert [j.id for j in page.items] == ["2", "3"]

    def test_invalid_per_page(self) -> None:
        with pytest.raises(ValueError, match="per_page"):
            paginate([], 1, per_page=0)
