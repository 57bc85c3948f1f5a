"""
routes_transactions.py
Purchase routes: buy an item and record its shipping address
"""

import logging

import psycopg2
from flask import Blueprint, request, render_template, redirect, url_for, flash, abort
from flask_login import login_required, current_user

from src.schema import OrderForm, ORDER_FIELDS


logger = logging.getLogger(__name__)

transactions_bp = Blueprint('transactions', __name__)

# db will be set by init_routes() in web_app.py
db = None

SOLD_OUT_MESSAGE = 'この商品は売り切れです'


def init_routes(database):
    """Initialize routes with database"""
    global db
    db = database


@transactions_bp.route('/items/<int:item_id>/transactions', methods=['GET', 'POST'])
@login_required
def purchase(item_id):
    """Purchase page; sellers and sold items go back to the index"""
    item = db.get_item(item_id)
    if not item:
        abort(404)
    if item['user_id'] == current_user.id or item.get('sold'):
        return redirect(url_for('items.index'))

    if request.method == 'GET':
        return render_template('transactions/new.html', item=item, order={}, errors=[])

    data = {field: request.form.get(f'order[{field}]', '') for field in ORDER_FIELDS}
    form, errors = OrderForm.parse(data)
    if errors:
        return render_template('transactions/new.html', item=item, order=data, errors=errors), 422

    try:
        order_id = db.create_order(
            user_id=current_user.id,
            item_id=item['id'],
            **form.model_dump()
        )
    except psycopg2.IntegrityError:
        # Someone else bought it first
        logger.info("[ORDERS] Item %s already sold", item['id'])
        flash(SOLD_OUT_MESSAGE, 'alert')
        return redirect(url_for('items.index'))

    logger.info("[ORDERS] User %s bought item %s (order %s)", current_user.id, item['id'], order_id)
    flash('購入が完了しました', 'notice')
    return redirect(url_for('items.index'))
