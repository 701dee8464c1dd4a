from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from models import Skin
from services import search_skins
from utils import parse_csv_arg, get_pagination, paginated_response
from utils.constants import SKINS_PER_PAGE

skins_bp = Blueprint('skins', __name__, url_prefix='/api/skins')

@skins_bp.route('', methods=['GET'])
def list_skins():
    """Browse the skin catalog with filters, sorting and pagination"""
    page, limit = get_pagination(request.args, SKINS_PER_PAGE)
    filters = {
        'search': request.args.get('search', '').strip(),
        'weapon_types': parse_csv_arg(request.args.get('weapon_types')),
        'rarities': parse_csv_arg(request.args.get('rarities')),
        'conditions': parse_csv_arg(request.args.get('conditions')),
        'price_min': request.args.get('price_min', type=float),
        'price_max': request.args.get('price_max', type=float),
        'sort_by': request.args.get('sort_by', 'name_asc'),
    }

    print(f"[Skins] Query params: {filters}, page={page}, limit={limit}")

    try:
        skins, total = search_skins(page=page, limit=limit, **filters)
    except SQLAlchemyError as e:
        print(f"[Skins] Error fetching skins: {e}")
        return jsonify({'error': 'Failed to fetch skins'}), 500

    print(f"[Skins] Returning {len(skins)} of {total} skins, page {page}")
    return jsonify(paginated_response([skin.to_dict() for skin in skins], total, page, limit))

@skins_bp.route('/<skin_id>', methods=['GET'])
def get_skin(skin_id):
    """Skin detail with every condition price"""
    skin = (Skin.query
            .options(selectinload(Skin.condition_prices))
            .filter_by(id=skin_id)
            .first())
    if not skin:
        return jsonify({'error': 'Skin not found'}), 404

    return jsonify(skin.to_dict())
