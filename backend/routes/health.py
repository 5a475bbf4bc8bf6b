# routes/health.py
from flask import Blueprint, jsonify, current_app
import logging
import time

logger = logging.getLogger(__name__)
health_bp = Blueprint('health', __name__)

@health_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint reporting database reachability"""
    health_status = {
        'status': 'unknown',
        'database': 'unknown',
        'timestamp': time.time()
    }

    try:
        current_app.extensions['catalog_store'].ping()
        health_status['status'] = 'healthy'
        health_status['database'] = 'connected'
        return jsonify(health_status), 200

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        health_status['status'] = 'unhealthy'
        health_status['database'] = 'unreachable'
        return jsonify(health_status), 503
