# -*- coding: utf-8 -*-
#
# KDBX Browser
# Terminal browser for KeePass databases
#

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from . import cli
from .error import Error
from .params import KdbxParams


def get_params_from_config(config_filename=None):    # type: (Optional[str]) -> KdbxParams
    if os.getenv('KDBX_BROWSER_DEBUG'):
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info('Debug ON')

    def get_env_config():
        path = os.getenv('KDBX_BROWSER_CONFIG_FILE')
        if path:
            logging.debug(f'Setting config file from KDBX_BROWSER_CONFIG_FILE env variable {path}')
        return path

    config_filename = config_filename or get_env_config()
    if not config_filename:
        config_filename = os.path.join(Path.home().joinpath('.kdbx-browser'), 'config.json')
    else:
        config_filename = os.path.expanduser(config_filename)

    params = KdbxParams()
    params.config_filename = config_filename
    if os.path.exists(config_filename):
        try:
            with open(params.config_filename) as config_file:
                params.config = json.load(config_file)
            if not isinstance(params.config, dict):
                raise ValueError('JSON object expected')
            if params.config.get('database'):
                params.database = params.config['database']
            if params.config.get('keyfile'):
                params.keyfile = params.config['keyfile']
            if params.config.get('debug') is True:
                params.debug = True
        except IOError as ioe:
            logging.warning('Error: Unable to open config file %s: %s', params.config_filename, ioe)
        except ValueError as e:
            logging.warning('Unable to parse JSON configuration file "%s": %s',
                            os.path.abspath(params.config_filename), e)
            params.config = {}

    if os.getenv('KDBX_BROWSER_DEBUG'):
        params.debug = True

    return params


def usage(m):
    print(m)
    parser.print_help()
    sys.exit(1)


parser = argparse.ArgumentParser(prog='kdbx-browser', description='Browse and search KeePass databases.',
                                 allow_abbrev=False)
parser.add_argument('--keyfile', '-k', dest='keyfile', action='store', help='Path to keyfile.')
parser.add_argument('--password', '-p', dest='password', action='store', help='Database password.')
parser.add_argument('--config', dest='config', action='store', help='Config file to use')
parser.add_argument('--debug', dest='debug', action='store_true', help='Turn on debug mode')
parser.add_argument('--version', dest='version', action='store_true', help='Display version')
parser.add_argument('db', nargs='?', type=str, action='store', help='Database file path')
parser.add_argument('entry_title', nargs='?', type=str, action='store',
                    help='Print the entries whose title matches exactly and exit')
parser.error = usage


def main(argv=None):    # type: (Optional[list]) -> None
    logging.basicConfig(format='%(message)s')

    opts = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if opts.version:
        print(f'KDBX Browser, version {__version__}')
        return

    params = get_params_from_config(opts.config)

    if opts.debug:
        params.debug = opts.debug

    if opts.db:
        params.database = opts.db
    if opts.keyfile:
        params.keyfile = opts.keyfile

    if opts.password is not None:
        params.password = opts.password
    else:
        pwd = os.getenv('KDBX_PASSWORD')
        if pwd:
            params.password = pwd

    params.batch_mode = opts.entry_title is not None
    logging.getLogger().setLevel(
        logging.DEBUG if params.debug else logging.WARNING if params.batch_mode else logging.INFO)

    if not params.database:
        usage('Database file path is required')

    errno = 0
    try:
        errno = cli.dispatch(params, opts.entry_title)
    except KeyboardInterrupt:
        logging.info('Canceled')
        errno = 1
    except Error as e:
        logging.error(str(e))
        errno = 1
    except Exception as e:
        logging.debug(e, exc_info=True)
        logging.error('An unexpected error occurred: %s', sys.exc_info()[0])
        errno = 1

    sys.exit(errno)


if __name__ == '__main__':
    main()
