import pytest

from chatroom.core.server_model import ServerModel


@pytest.fixture
def model():
    return ServerModel()


@pytest.fixture
def three_users(model):
    """User0, User1, User2 on connection ids 0, 1, 2."""
    for conn_id in range(3):
        model.connect(conn_id)
    return model
