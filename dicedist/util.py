"""
Utility functions, config and logging setup.
"""
import logging
import logging.handlers
import logging.config
import os

import yaml
try:
    from yaml import CLoader as Loader, CDumper as Dumper
except ImportError:  # pragma: no cover
    from yaml import Loader, Dumper


class ReprMixin():
    """
    Generate a repr from the attributes named in _repr_keys.
    """
    _repr_keys = []

    def __repr__(self):
        kwargs = ', '.join('{}={!r}'.format(key, getattr(self, key)) for key in self._repr_keys)
        return '{}({})'.format(self.__class__.__name__, kwargs)


class ModFormatter(logging.Formatter):
    """
    Add a relmod key to record dict.
    This key tracks a module relative this project' root.
    """
    def format(self, record):
        relmod = record.__dict__['pathname'].replace(ROOT_DIR + os.path.sep, '')
        record.__dict__['relmod'] = relmod[:-3]
        return super().format(record)


def rel_to_abs(*path_parts):
    """
    Convert an internally relative path to an absolute one.
    """
    return os.path.join(ROOT_DIR, *path_parts)


def get_config(*keys, default=None):
    """
    Return keys straight from yaml config.

    Kwargs
        Default if provided, will be returned if config entry not found.

    Raises
        KeyError: No such key in the config.
        FileNotFoundError: Failed to load the configuration file.
    """
    with open(YAML_FILE) as fin:
        conf = yaml.load(fin, Loader=Loader)

    try:
        for key in keys:
            conf = conf[key]
    except KeyError:
        if default is not None:
            return default
        raise

    return conf


def init_logging():  # pragma: no cover
    """
    Initialize project wide logging. See config file for details and reference on module.

     - On every start the file logs are rolled over.
     - This must be the first invocation on startup to set up logging.

    Raises:
        FileNotFoundError: Failed to load the configuration file.
    """
    log_file = rel_to_abs(get_config('paths', 'log_conf'))
    with open(log_file) as fin:
        lconf = yaml.load(fin, Loader=Loader)

    for handler in lconf['handlers'].values():
        try:
            os.makedirs(os.path.dirname(handler['filename']))
        except (OSError, KeyError):
            pass

    logging.config.dictConfig(lconf)

    for handler in logging.getLogger('dicedist').handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.doRollover()


def load_yaml(fname):
    """
    Load a yaml file and return the dict. If not found, return an empty {}.
    Does not raise any possible exception.

    Returns: A dict object.
    """
    try:
        with open(fname) as fin:
            obj = yaml.load(fin, Loader=Loader)
    except FileNotFoundError:
        obj = {}

    return obj


def write_yaml(fname, obj):
    """
    Save a dictionary to a yaml file.

    Raises:
        OSError - Something prevented saving the file.
    """
    with open(fname, 'w') as fout:
        fout.write(dump_yaml(obj))


def dump_yaml(obj):
    """
    Dump an object to a yaml document string.
    """
    return yaml.dump(obj, Dumper=Dumper, indent=2, explicit_start=True,
                     default_flow_style=False)


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
YAML_FILE = rel_to_abs('data', 'config.yml')
