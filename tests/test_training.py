import anyio
import pytest

from luis_authoring.services.authoring import TrainingTimeoutError, summarize_training
from luis_authoring.services.authoring.schemas import ModelTrainingStatus, TrainingStatus

from conftest import model_status

QUEUED = {"statusId": 9, "status": "Queued"}


@pytest.fixture
def app_id(fake_service):
    return fake_service.add_app("Trainee")


@pytest.mark.anyio
async def test_up_to_date_skips_polling(luis, fake_service, app_id):
    fake_service.train_initial = {"statusId": 2, "status": "UpToDate"}

    result = await luis.train.train_and_wait(app_id, "0.1")

    assert result.success is True
    assert result.status_id == TrainingStatus.UP_TO_DATE
    assert fake_service.count("GET", "/train") == 0


@pytest.mark.anyio
async def test_in_progress_then_fail(luis, fake_service, app_id):
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [
        [model_status(3), model_status(2)],
        [model_status(1, failureReason="FewLabels"), model_status(1)],
    ]

    result = await luis.train.train_and_wait(app_id, "0.1")

    assert result.success is False
    assert result.status_id == TrainingStatus.FAIL
    assert fake_service.count("GET", "/train") == 2
    assert [s.details.failure_reason for s in result.status] == ["FewLabels", None]


@pytest.mark.anyio
async def test_all_up_to_date_after_polling(luis, fake_service, app_id):
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [[model_status(3)], [model_status(2), model_status(2)]]

    result = await luis.train.train_and_wait(app_id, "0.1")

    assert result.success is True
    assert result.status_id == TrainingStatus.UP_TO_DATE
    assert result.status is None


@pytest.mark.anyio
async def test_mixed_statuses_are_success(luis, fake_service, app_id):
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [[model_status(0), model_status(2)]]

    result = await luis.train.train_and_wait(app_id, "0.1")

    assert result.success is True
    assert result.status_id == TrainingStatus.SUCCESS
    assert fake_service.count("GET", "/train") == 1


@pytest.mark.anyio
async def test_unexpected_initial_status_is_failure(luis, fake_service, app_id):
    fake_service.train_initial = {"statusId": 3, "status": "InProgress"}

    result = await luis.train.train_and_wait(app_id, "0.1")

    assert result.success is False
    assert result.status_id == TrainingStatus.FAIL
    assert fake_service.count("GET", "/train") == 0


@pytest.mark.anyio
async def test_max_polls_bounds_the_wait(luis, fake_service, app_id):
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [[model_status(3, model_id="stuck")]]

    with pytest.raises(TrainingTimeoutError) as exc_info:
        await luis.train.train_and_wait(app_id, "0.1", max_polls=3)

    assert fake_service.count("GET", "/train") == 3
    assert [s.model_id for s in exc_info.value.last_status] == ["stuck"]


@pytest.mark.anyio
async def test_timeout_bounds_the_wait(luis, fake_service, app_id):
    luis.train.poll_interval = 0.01
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [[model_status(3)]]

    with pytest.raises(TrainingTimeoutError):
        await luis.train.train_and_wait(app_id, "0.1", timeout=0.1)


@pytest.mark.anyio
async def test_wait_can_be_cancelled(luis, fake_service, app_id):
    luis.train.poll_interval = 0.01
    fake_service.train_initial = QUEUED
    fake_service.train_polls = [[model_status(3)]]

    with anyio.move_on_after(0.1) as scope:
        await luis.train.train_and_wait(app_id, "0.1")

    assert scope.cancelled_caught
    assert fake_service.count("GET", "/train") >= 1


def test_summarize_empty_status_list_is_up_to_date():
    result = summarize_training([])

    assert result.success is True
    assert result.status_id == TrainingStatus.UP_TO_DATE


def test_summarize_fail_wins_over_success():
    statuses = [ModelTrainingStatus.model_validate(model_status(s)) for s in (0, 2, 1)]

    result = summarize_training(statuses)

    assert result.success is False
    assert result.status == statuses
