import logging
import logging.config

def setup_logging(tracker_config=None, debug: bool = False) -> logging.Logger:
    """Настройка логирования из конфигурации приложения"""
    if tracker_config is None:
        from config import config as tracker_config

    if tracker_config.log_to_file:
        tracker_config.log_dir.mkdir(exist_ok=True, parents=True)

    logging_config = tracker_config.get_logging_config()
    if debug:
        for handler in logging_config['handlers'].values():
            handler['level'] = 'DEBUG'
        logging_config['loggers']['']['level'] = 'DEBUG'

    logging.config.dictConfig(logging_config)
    return logging.getLogger('growthtracker')
