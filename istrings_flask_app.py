#!/usr/bin/env python3
"""istrings Web Interface - Flask Backend"""

from flask import Flask, render_template, request, jsonify, send_file
from pathlib import Path
import json
import os
import shutil
import time
from datetime import datetime
from werkzeug.utils import secure_filename

from istrings.artifacts import DEFAULT_MIN_SEQUENCE
from istrings.report import scan_file, write_json, write_markdown

# index.html lives next to this script rather than in a templates/ directory.
app = Flask(__name__, template_folder=str(Path(__file__).resolve().parent))
app.config['MAX_CONTENT_LENGTH'] = 100 * 1024 * 1024  # 100MB max file size
app.config['UPLOAD_FOLDER'] = Path(os.environ.get('ISTRINGS_UPLOAD_DIR', Path(__file__).parent / 'uploads'))
app.config['RUNS_DIR'] = Path(os.environ.get('ISTRINGS_RUNS_DIR', Path(os.getcwd()) / 'istrings_runs'))


def get_all_runs():
    """Get all run directories sorted by timestamp (newest first)"""
    runs_dir = app.config['RUNS_DIR']
    if not runs_dir.exists():
        return []

    runs = []
    for run_dir in runs_dir.glob("run_*"):
        report_path = run_dir / "report.json"
        if not report_path.exists():
            continue

        try:
            with open(report_path, encoding='utf-8') as f:
                report = json.load(f)
        except (OSError, ValueError):
            continue

        runs.append({
            'id': run_dir.name,
            'path': str(run_dir),
            'file': report.get('file', 'unknown'),
            'timestamp': report.get('ts', ''),
            'min_sequence': report.get('min_sequence'),
            'count': report.get('count', 0),
        })

    runs.sort(key=lambda x: (x['timestamp'], x['id']), reverse=True)
    return runs


def run_path(run_id):
    name = secure_filename(run_id)
    if not name.startswith("run_"):
        return None
    return app.config['RUNS_DIR'] / name


def new_run_dir() -> Path:
    runs_dir = app.config['RUNS_DIR']
    base = "run_" + datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = runs_dir / base
    n = 1
    while run_dir.exists():
        run_dir = runs_dir / f"{base}_{n}"
        n += 1
    run_dir.mkdir(parents=True)
    return run_dir


@app.route('/')
def index():
    """Main dashboard"""
    return render_template('index.html', default_min=DEFAULT_MIN_SEQUENCE)


@app.route('/api/runs')
def api_runs():
    return jsonify(get_all_runs())


@app.route('/api/run/<run_id>')
def api_run_detail(run_id):
    """Get the report of a specific run"""
    run_dir = run_path(run_id)
    if run_dir is None or not (run_dir / "report.json").exists():
        return jsonify({'error': 'Run not found'}), 404

    try:
        with open(run_dir / "report.json", encoding='utf-8') as f:
            report = json.load(f)
    except (OSError, ValueError) as e:
        return jsonify({'error': str(e)}), 500
    return jsonify({'report': report, 'run_id': run_id})


@app.route('/api/run/<run_id>/strings.txt')
def api_download_strings(run_id):
    """Download the accepted strings of a run, one per line"""
    run_dir = run_path(run_id)
    if run_dir is None or not (run_dir / "strings.txt").is_file():
        return jsonify({'error': 'Run not found'}), 404
    return send_file((run_dir / "strings.txt").resolve(), as_attachment=True, download_name=f"{run_id}.txt")


@app.route('/api/upload', methods=['POST'])
def api_upload():
    """Upload a sample file"""
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']
    if file.filename == '':
        return jsonify({'error': 'Empty filename'}), 400

    filename = secure_filename(file.filename)
    if not filename:
        return jsonify({'error': 'Invalid filename'}), 400

    upload_dir = app.config['UPLOAD_FOLDER']
    upload_dir.mkdir(parents=True, exist_ok=True)
    filepath = upload_dir / filename
    file.save(filepath)

    return jsonify({
        'success': True,
        'filename': filename,
        'path': str(filepath)
    })


@app.route('/api/scan', methods=['POST'])
def api_scan():
    """Extract strings from a sample and store the result as a run"""
    data = request.get_json(silent=True) or {}
    sample_path = data.get('sample_path')
    if not sample_path:
        return jsonify({'error': 'No sample path provided'}), 400

    try:
        min_sequence = int(data.get('min', DEFAULT_MIN_SEQUENCE))
    except (TypeError, ValueError):
        min_sequence = DEFAULT_MIN_SEQUENCE

    sample = Path(sample_path).resolve()
    upload_dir = app.config['UPLOAD_FOLDER'].resolve()
    if not sample.is_relative_to(upload_dir) or not sample.is_file():
        return jsonify({'error': 'Sample not found'}), 404

    t0 = time.time()
    try:
        report = scan_file(sample, min_sequence)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except OSError as e:
        return jsonify({'error': str(e)}), 500
    report['ts'] = datetime.now().replace(microsecond=0).isoformat()
    report['duration_s'] = round(time.time() - t0, 3)

    run_dir = new_run_dir()
    write_json(run_dir / "report.json", report)
    write_markdown(run_dir / "report.md", report)
    (run_dir / "strings.txt").write_text("".join(s + "\n" for s in report['strings']), encoding='ascii')

    return jsonify({
        'success': True,
        'run_id': run_dir.name,
        'report': report
    })


@app.route('/api/samples')
def api_samples():
    """List available samples in uploads folder"""
    samples = []
    upload_dir = app.config['UPLOAD_FOLDER']

    if upload_dir.exists():
        for item in sorted(upload_dir.iterdir()):
            if item.is_file():
                samples.append({
                    'name': item.name,
                    'path': str(item),
                    'size': item.stat().st_size,
                    'modified': datetime.fromtimestamp(item.stat().st_mtime).isoformat()
                })

    return jsonify(samples)


@app.route('/api/run/<run_id>/delete', methods=['DELETE'])
def api_delete_run(run_id):
    run_dir = run_path(run_id)
    if run_dir is None or not run_dir.is_dir():
        return jsonify({'error': 'Run not found'}), 404

    try:
        shutil.rmtree(run_dir)
    except OSError as e:
        return jsonify({'error': str(e)}), 500
    return jsonify({'success': True})


if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5000)
