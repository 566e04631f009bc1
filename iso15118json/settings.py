from typing import Optional

import environs

from iso15118json.logging import init_logger


class SettingKey:
    LOG_LEVEL = "LOG_LEVEL"
    MESSAGE_LOG_JSON = "MESSAGE_LOG_JSON"
    REJECT_UNKNOWN_FIELDS = "REJECT_UNKNOWN_FIELDS"


shared_settings = {
    SettingKey.LOG_LEVEL: "INFO",
    SettingKey.MESSAGE_LOG_JSON: False,
    SettingKey.REJECT_UNKNOWN_FIELDS: True,
}


def load_shared_settings(env_path: Optional[str] = None):
    env = environs.Env(eager=False)
    env.read_env(path=env_path)  # read .env file, if it exists

    settings = {
        SettingKey.LOG_LEVEL: env.str("LOG_LEVEL", default="INFO"),
        # Logs every JSON document the codec parses or produces
        SettingKey.MESSAGE_LOG_JSON: env.bool("MESSAGE_LOG_JSON", default=False),
        # Unknown keys in an incoming message are a parse failure if True and
        # silently ignored otherwise
        SettingKey.REJECT_UNKNOWN_FIELDS: env.bool(
            "REJECT_UNKNOWN_FIELDS", default=True
        ),
    }
    env.seal()  # raise all errors at once, if any
    shared_settings.update(settings)
    init_logger(shared_settings[SettingKey.LOG_LEVEL])
