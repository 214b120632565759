# well_rng/oracle/app.py
# Flask oracle exposing /get_output, /get_u64, /get_f32, /state, /load and /validate
# Supports SEED_MODE = 'fixed' | 'random' | 'time'

import logging
import threading
import time

from flask import Flask, jsonify, request

from well_rng.entropy import OsEntropy
from well_rng.reveal import hex_width, mask_output
from well_rng.well1024a import MASK32, InvalidStateLength, Well1024aRng

from . import config

# Setup logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger('oracle')


def derive_seed_state():
    """
    Build the oracle's generator according to config.SEED_MODE.
    Priority:
      - If SEED_MODE == 'fixed' and config.SEED is int -> from_seed(SEED)
      - If SEED_MODE == 'fixed' and config.SEED is None -> from_seed(DEFAULT_SEED)
      - If SEED_MODE == 'random' -> all 32 words from os.urandom
      - If SEED_MODE == 'time' -> current time (seconds or ms) as a 32-bit seed
    """
    mode = (config.SEED_MODE or 'fixed').lower()
    if mode == 'fixed':
        if config.SEED is not None:
            seed = int(config.SEED) & MASK32
            logger.info(f"Using fixed SEED from config: {seed:08x}")
        else:
            seed = config.DEFAULT_SEED
            logger.info(f"Using default fixed SEED: {seed:08x}")
        return Well1024aRng.from_seed(seed)
    elif mode == 'random':
        logger.info("Using random state (os.urandom)")
        return Well1024aRng.from_entropy(OsEntropy())
    elif mode == 'time':
        if config.TIME_GRANULARITY == 'ms':
            t = int(time.time() * 1000)
        else:
            t = int(time.time())
        # intentionally low entropy (for demo of weak seed)
        seed = t & MASK32
        logger.info(f"Using time-derived SEED (granu={config.TIME_GRANULARITY}): {seed:08x}")
        return Well1024aRng.from_seed(seed)
    else:
        seed = config.DEFAULT_SEED
        logger.warning(f"Unknown SEED_MODE '{config.SEED_MODE}', falling back to default SEED: {seed:08x}")
        return Well1024aRng.from_seed(seed)


def oracle_mask(x):
    return mask_output(x, config.OUTPUT_BITS, config.OUTPUT_SELECT)


def hex_output(value):
    return format(value, '0{}x'.format(hex_width(config.OUTPUT_BITS)))


def create_app(rng=None):
    app = Flask(__name__)
    if rng is None:
        rng = derive_seed_state()
    app.config['RNG'] = rng
    # one generator, many request threads
    lock = threading.Lock()

    def draw(method):
        with lock:
            return getattr(app.config['RNG'], method)()

    @app.route('/get_output', methods=['GET'])
    def get_output():
        out = oracle_mask(draw('next_u32'))
        return jsonify({'output': hex_output(out)})

    @app.route('/get_u64', methods=['GET'])
    def get_u64():
        return jsonify({'output': format(draw('next_u64'), '016x')})

    @app.route('/get_f32', methods=['GET'])
    def get_f32():
        return jsonify({'output': float(draw('next_f32'))})

    @app.route('/state', methods=['GET'])
    def get_state():
        if not config.ALLOW_STATE_ACCESS:
            return jsonify({'ok': False, 'reason': 'state access disabled'}), 403
        with lock:
            state = app.config['RNG'].snapshot()
        return jsonify({'state': state})

    @app.route('/load', methods=['POST'])
    def load_state():
        if not config.ALLOW_STATE_ACCESS:
            return jsonify({'ok': False, 'reason': 'state access disabled'}), 403
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('state'), list):
            return jsonify({'ok': False, 'reason': 'need state'}), 400
        words = data['state']
        # JSON true/false arrive as bool, a subclass of int
        if not all(isinstance(w, int) and not isinstance(w, bool) and 0 <= w <= MASK32 for w in words):
            return jsonify({'ok': False, 'reason': 'state words must be 32-bit unsigned ints'}), 400
        try:
            new_rng = Well1024aRng.load(words)
        except InvalidStateLength as e:
            logger.info(f"Rejected state load: {e}")
            return jsonify({'ok': False, 'reason': str(e),
                            'expected': e.expected, 'actual': e.actual}), 400
        with lock:
            app.config['RNG'] = new_rng
        logger.info("Generator state replaced via /load")
        return jsonify({'ok': True})

    @app.route('/validate', methods=['POST'])
    def validate():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'candidate' not in data:
            return jsonify({'ok': False, 'reason': 'need candidate'}), 400
        try:
            candidate = int(data['candidate'], 16)
        except (TypeError, ValueError):
            return jsonify({'ok': False, 'reason': 'bad hex'}), 400
        expected = oracle_mask(draw('next_u32'))
        ok = (candidate & ((1 << config.OUTPUT_BITS) - 1)) == expected
        return jsonify({'ok': ok, 'expected': hex_output(expected)})

    return app


def main():
    app = create_app()
    logger.info(f"Starting oracle at http://{config.HOST}:{config.PORT} with SEED_MODE={config.SEED_MODE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)


if __name__ == '__main__':
    main()
