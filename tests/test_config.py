import os

from payroll_ledger import config


def test_data_home_honours_environment_override(tmp_path):
    home = config.data_home({config.HOME_ENV_VAR: str(tmp_path / "ledger")})
    assert home == str(tmp_path / "ledger")


def test_data_home_defaults_to_user_directory():
    home = config.data_home({})
    assert home == os.path.join(os.path.expanduser("~"), ".payroll_ledger")


def test_storage_paths_live_under_base_dir():
    package_dir = os.path.dirname(os.path.abspath(config.__file__))
    for path in (config.DATA_FILE_PATH, config.BACKUP_FILE_PATH, config.REPORTS_DIR, config.LOG_FILE_PATH):
        assert path.startswith(config.BASE_DIR)
        assert not path.startswith(package_dir)
