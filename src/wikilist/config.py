# Handles config loading for wikilist

import yaml
from pathlib import Path

CONFIG_PATH = Path(__file__).parent.parent.parent / 'config.yaml'


def load_config(path=CONFIG_PATH):
    with open(path, 'r', encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}

    # Ensure some expected sections exist to avoid KeyError later
    if 'wiki' not in cfg:
        cfg['wiki'] = {}
    cfg['wiki'].setdefault('url', 'https://en.wikipedia.org')
    cfg['wiki'].setdefault('api_endpoint', '/w/api.php')

    if 'client' not in cfg:
        cfg['client'] = {}
    client = cfg['client']
    client.setdefault('user_agent', 'wikilist/0.1 (https://github.com/wikilist/wikilist)')
    client.setdefault('timeout', 30)
    client.setdefault('max_retries', 3)
    client.setdefault('backoff', 2)

    if 'site' not in cfg:
        cfg['site'] = {}
    cfg['site'].setdefault('account_assertion', 'none')

    if 'lists' not in cfg:
        cfg['lists'] = {}
    cfg['lists'].setdefault('continuation_loop', 'none')

    return cfg


def api_url(cfg):
    """Full API endpoint, e.g. https://en.wikipedia.org/w/api.php."""
    return cfg['wiki']['url'].rstrip('/') + cfg['wiki']['api_endpoint']
