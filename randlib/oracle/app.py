# randlib/oracle/app.py
# Flask oracle exposing generator outputs: /get_output, /sample/<kind>, /validate, /sources
# Seed comes from config.SEED_MODE = 'fixed' | 'time' | 'crand' | 'urandom' | 'random'

import logging

from flask import Flask, jsonify, request

from randlib import config
from randlib.lfsr import Random, truncate_output
from randlib.seed import available_sources, source_from_config

app = Flask(__name__)

# Setup logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger('oracle')

# Initialize RNG with the configured seed source
RNG = Random(source_from_config())

ACCESSORS = {
    'bool': Random.rand_bool,
    'u8': Random.rand_u8,
    'u16': Random.rand_u16,
    'u32': Random.rand_u32,
    'u64': Random.rand_u64,
    'u128': Random.rand_u128,
    'i8': Random.rand_i8,
    'i16': Random.rand_i16,
    'i32': Random.rand_i32,
    'i64': Random.rand_i64,
    'i128': Random.rand_i128,
    'f32': Random.rand_f32,
    'f64': Random.rand_f64,
}


def mask_output(x, bits=None, select=None):
    bits = config.OUTPUT_BITS if bits is None else bits
    select = config.OUTPUT_SELECT if select is None else select
    return truncate_output(x, bits, select)


def _hex(value):
    hexdigits = (config.OUTPUT_BITS + 3) // 4
    return format(value, '0{}x'.format(hexdigits))


@app.route('/get_output', methods=['GET'])
def get_output():
    out = mask_output(RNG.random())
    return jsonify({'output': _hex(out)})


@app.route('/sample/<kind>', methods=['GET'])
def sample(kind):
    accessor = ACCESSORS.get(kind)
    if accessor is None:
        return jsonify({'ok': False, 'reason': f'unknown kind {kind}'}), 404
    return jsonify({'kind': kind, 'value': accessor(RNG)})


@app.route('/validate', methods=['POST'])
def validate():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'candidate' not in data:
        return jsonify({'ok': False, 'reason': 'need candidate'}), 400
    try:
        candidate = int(data['candidate'], 16)
    except (TypeError, ValueError):
        return jsonify({'ok': False, 'reason': 'bad hex'}), 400
    expected = mask_output(RNG.random())
    ok = (candidate & ((1 << config.OUTPUT_BITS) - 1)) == expected
    return jsonify({'ok': ok, 'expected': _hex(expected)})


@app.route('/sources', methods=['GET'])
def sources():
    return jsonify({'available': available_sources(), 'seed_mode': config.SEED_MODE})


if __name__ == '__main__':
    logger.info(f"Starting oracle at http://{config.HOST}:{config.PORT} with SEED_MODE={config.SEED_MODE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)
