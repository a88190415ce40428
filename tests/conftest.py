import pytest
from decimal import Decimal
from models.payroll import Incentive, PayrollInput

@pytest.fixture
def app():
    from app import app as flask_app
    flask_app.config['TESTING'] = True
    return flask_app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def sample_input():
    """Basic 100,000 with a single 25,000 incentive"""
    return PayrollInput(
        basic_salary=Decimal('100000'),
        incentives=(Incentive('bonus', 'Performance bonus', Decimal('25000')),)
    )
