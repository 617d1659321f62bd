from django import forms

from .services import MAX_QUANTITY


class QuantityForm(forms.Form):
    # 0 removes the line
    quantity = forms.IntegerField(min_value=0, max_value=MAX_QUANTITY)
