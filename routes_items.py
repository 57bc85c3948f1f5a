"""
routes_items.py
Item routes: listing index, detail, create, edit, update, delete
"""

import logging
from functools import wraps

from flask import Blueprint, request, render_template, redirect, url_for, flash, abort
from flask_login import login_required, current_user

from src.schema import ItemForm, ITEM_FIELDS
from src.storage import InvalidImageError


logger = logging.getLogger(__name__)

# Create blueprint
items_bp = Blueprint('items', __name__)

# db and image_store will be set by init_routes() in web_app.py
db = None
image_store = None

INVALID_IMAGE_MESSAGE = "Image is invalid. Attach a PNG, JPEG or GIF file"


def init_routes(database, store):
    """Initialize routes with database and image store"""
    global db, image_store
    db = database
    image_store = store


# ============================================================================
# OWNERSHIP DECORATOR
# ============================================================================

def owner_required(f):
    """Decorator to require that current_user owns an unsold item.

    The view receives the loaded item instead of item_id. Anyone else is sent
    back to the index before the item is shown or changed.
    """
    @wraps(f)
    @login_required
    def decorated_function(item_id, **kwargs):
        item = db.get_item(item_id)
        if not item:
            abort(404)
        if item['user_id'] != current_user.id or item.get('sold'):
            logger.info("[ITEMS] User %s denied access to item %s", current_user.id, item_id)
            return redirect(url_for('items.index'))
        return f(item, **kwargs)
    return decorated_function


def _item_params():
    """Submitted item[...] fields"""
    return {field: request.form.get(f'item[{field}]', '') for field in ITEM_FIELDS}


def _validate_submission(data, upload, require_image):
    """Validate fields and attached image; returns (form, errors)"""
    has_image = image_store.has_file(upload)
    form, errors = ItemForm.parse(
        {**data, 'image': upload.filename if has_image else None},
        require_image=require_image,
    )

    if has_image:
        try:
            image_store.verify(upload)
        except InvalidImageError as e:
            logger.info("[ITEMS] Rejected upload %r: %s", upload.filename, e)
            errors.append(INVALID_IMAGE_MESSAGE)
            form = None

    return form, errors


# -------------------------------------------------------------------------
# INDEX / DETAIL
# -------------------------------------------------------------------------

@items_bp.route('/')
def index():
    """Home page - every item, newest first"""
    items = db.get_items()
    return render_template('items/index.html', items=items)


@items_bp.route('/items/<int:item_id>')
def show(item_id):
    item = db.get_item(item_id)
    if not item:
        abort(404)

    is_owner = current_user.is_authenticated and current_user.id == item['user_id']
    return render_template('items/show.html', item=item, is_owner=is_owner)


# -------------------------------------------------------------------------
# CREATE
# -------------------------------------------------------------------------

@items_bp.route('/items/new')
@login_required
def new():
    return render_template('items/new.html', item={}, errors=[])


@items_bp.route('/items', methods=['POST'])
@login_required
def create():
    """Put a new item up for sale"""
    data = _item_params()
    upload = request.files.get('item[image]')

    form, errors = _validate_submission(data, upload, require_image=True)
    if errors:
        return render_template('items/new.html', item=data, errors=errors), 422

    image_path = image_store.save(upload)
    try:
        item_id = db.create_item(
            user_id=current_user.id,
            image=image_path,
            **form.to_record()
        )
    except Exception:
        image_store.delete(image_path)
        raise

    logger.info("[ITEMS] User %s listed item %s", current_user.id, item_id)
    return redirect(url_for('items.index'))


# -------------------------------------------------------------------------
# EDIT / UPDATE
# -------------------------------------------------------------------------

@items_bp.route('/items/<int:item_id>/edit')
@owner_required
def edit(item):
    return render_template('items/edit.html', item=item, errors=[])


@items_bp.route('/items/<int:item_id>', methods=['POST', 'PUT', 'PATCH'])
@owner_required
def update(item):
    """Update an item in place; the stored image is kept unless a new one is attached"""
    data = _item_params()
    upload = request.files.get('item[image]')

    form, errors = _validate_submission(data, upload, require_image=False)
    if errors:
        return render_template('items/edit.html', item={**item, **data}, errors=errors), 422

    changes = form.to_record()
    replaced_image = None
    if image_store.has_file(upload):
        changes['image'] = image_store.save(upload)
        replaced_image = item['image']

    try:
        db.update_item(item['id'], **changes)
    except Exception:
        image_store.delete(changes.get('image'))
        raise

    if replaced_image:
        image_store.delete(replaced_image)

    logger.info("[ITEMS] User %s updated item %s", current_user.id, item['id'])
    return redirect(url_for('items.show', item_id=item['id']))


# -------------------------------------------------------------------------
# DELETE
# -------------------------------------------------------------------------

@items_bp.route('/items/<int:item_id>/delete', methods=['POST'])
@owner_required
def destroy(item):
    db.delete_item(item['id'])
    image_store.delete(item['image'])

    logger.info("[ITEMS] User %s deleted item %s", current_user.id, item['id'])
    flash('商品を削除しました', 'notice')
    return redirect(url_for('items.index'))
