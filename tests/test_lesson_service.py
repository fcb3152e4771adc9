import pytest

from classcart_api.app.core.db import LESSONS
from classcart_api.app.core.errors import (
    CapacityExceededError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from classcart_api.app.services.lesson_service import LessonService

from .conftest import CLOUD_ID, MISSING_ID, PYTHON_ID, SECURITY_ID


@pytest.mark.asyncio
async def test_list_all_returns_lessons_in_store_order(store):
    lessons = await LessonService(store).list_all()
    assert [lesson.id for lesson in lessons] == [str(PYTHON_ID), str(CLOUD_ID), str(SECURITY_ID)]


@pytest.mark.asyncio
async def test_list_all_wraps_store_failures(store):
    store.collections[LESSONS].failing = True
    with pytest.raises(StoreError) as excinfo:
        await LessonService(store).list_all()
    assert excinfo.value.message == "Error fetching lessons"
    assert "connection refused" in excinfo.value.detail


@pytest.mark.asyncio
async def test_search_matches_subject_or_location_case_insensitively(store):
    service = LessonService(store)
    by_subject = await service.search("PYTHON")
    by_location = await service.search("newcast")
    assert [lesson.subject for lesson in by_subject] == ["Python Programming"]
    assert [lesson.location for lesson in by_location] == ["Newcastle"]


@pytest.mark.asyncio
async def test_search_results_are_subset_of_list_all(store):
    service = LessonService(store)
    all_ids = {lesson.id for lesson in await service.list_all()}
    found = await service.search("o")
    assert found
    assert {lesson.id for lesson in found} <= all_ids
    for lesson in found:
        assert "o" in lesson.subject.lower() or "o" in lesson.location.lower()


@pytest.mark.asyncio
async def test_search_for_absent_term_is_empty(store):
    assert await LessonService(store).search("zzz-no-such-lesson") == []


@pytest.mark.asyncio
async def test_search_treats_term_literally(store):
    assert await LessonService(store).search(".*") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("term", [None, ""])
async def test_search_requires_term(store, term):
    with pytest.raises(ValidationError):
        await LessonService(store).search(term)


@pytest.mark.asyncio
async def test_get_by_id_is_repeatable(store):
    service = LessonService(store)
    first = await service.get_by_id(str(PYTHON_ID))
    second = await service.get_by_id(str(PYTHON_ID))
    assert first == second
    assert first.subject == "Python Programming"


@pytest.mark.asyncio
async def test_get_by_id_rejects_malformed_id(store):
    with pytest.raises(ValidationError) as excinfo:
        await LessonService(store).get_by_id("xyz")
    assert excinfo.value.message == "Invalid lesson ID format"


@pytest.mark.asyncio
async def test_get_by_id_unknown_lesson(store):
    with pytest.raises(NotFoundError):
        await LessonService(store).get_by_id(MISSING_ID)


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [0, 3, 500])
async def test_update_capacity_then_get_returns_new_value(store, value):
    service = LessonService(store)
    updated = await service.update_capacity(str(CLOUD_ID), value)
    assert updated.availableSpaces == value
    assert (await service.get_by_id(str(CLOUD_ID))).availableSpaces == value


@pytest.mark.asyncio
async def test_update_capacity_is_idempotent(store):
    service = LessonService(store)
    await service.update_capacity(str(CLOUD_ID), 4)
    await service.update_capacity(str(CLOUD_ID), 4)
    assert (await service.get_by_id(str(CLOUD_ID))).availableSpaces == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, -1, "3", True, 2.5])
async def test_update_capacity_rejects_bad_values(store, value):
    with pytest.raises(ValidationError) as excinfo:
        await LessonService(store).update_capacity(str(CLOUD_ID), value)
    assert excinfo.value.message == "Valid availableSpaces value is required"


@pytest.mark.asyncio
async def test_update_capacity_validates_id_before_value(store):
    with pytest.raises(ValidationError) as excinfo:
        await LessonService(store).update_capacity("xyz", -1)
    assert excinfo.value.message == "Invalid lesson ID format"


@pytest.mark.asyncio
async def test_update_capacity_unknown_lesson(store):
    with pytest.raises(NotFoundError):
        await LessonService(store).update_capacity(MISSING_ID, 3)


@pytest.mark.asyncio
async def test_reserve_spaces_decrements(store):
    lesson = await LessonService(store).reserve_spaces(str(PYTHON_ID), 5)
    assert lesson.availableSpaces == 7


@pytest.mark.asyncio
async def test_reserve_spaces_never_goes_negative(store):
    service = LessonService(store)
    with pytest.raises(CapacityExceededError):
        await service.reserve_spaces(str(SECURITY_ID), 2)
    assert (await service.get_by_id(str(SECURITY_ID))).availableSpaces == 1


@pytest.mark.asyncio
async def test_reserve_spaces_unknown_lesson(store):
    with pytest.raises(NotFoundError):
        await LessonService(store).reserve_spaces(MISSING_ID, 1)


@pytest.mark.asyncio
async def test_release_spaces_gives_capacity_back(store):
    service = LessonService(store)
    await service.reserve_spaces(str(CLOUD_ID), 2)
    await service.release_spaces(str(CLOUD_ID), 2)
    assert (await service.get_by_id(str(CLOUD_ID))).availableSpaces == 5


@pytest.mark.asyncio
async def test_search_accepts_whitespace_term(store):
    assert await LessonService(store).search("   ") == []


@pytest.mark.asyncio
async def test_update_capacity_rejects_values_too_large_to_store(store):
    service = LessonService(store)
    with pytest.raises(ValidationError) as excinfo:
        await service.update_capacity(str(CLOUD_ID), 10**20)
    assert excinfo.value.message == "Valid availableSpaces value is required"
    assert (await service.get_by_id(str(CLOUD_ID))).availableSpaces == 5
    assert (await service.update_capacity(str(CLOUD_ID), 2**63 - 1)).availableSpaces == 2**63 - 1
