from django import forms

from base.validators import validate_card_details
from .models import Student, StudentFee


class ProfileImageForm(forms.ModelForm):
    class Meta:
        model = Student
        fields = ["profile_image"]


class OnlinePaymentForm(forms.Form):
    """Card payment against a tuition or exam fee"""

    admission_number = forms.CharField(max_length=30)
    fee_type = forms.ChoiceField(choices=StudentFee.FeeType.choices)
    academic_year = forms.RegexField(regex=r"^\d{4}-\d{4}$", max_length=9)
    semester = forms.IntegerField(min_value=1, max_value=8, required=False)
    amount = forms.FloatField(min_value=0.01, required=False)
    subject_count = forms.IntegerField(min_value=0, required=False)
    all_subjects = forms.BooleanField(required=False)
    late_fee = forms.FloatField(min_value=0, required=False)
    card_number = forms.CharField(max_length=25)
    expiry = forms.CharField(max_length=5)
    cvv = forms.CharField(max_length=4)
    email = forms.CharField(max_length=150, required=False)
    mobile = forms.CharField(max_length=15, required=False)

    def clean(self):
        cleaned_data = super().clean()
        error = validate_card_details(
            cleaned_data.get("card_number", ""),
            cleaned_data.get("expiry", ""),
            cleaned_data.get("cvv", ""),
            cleaned_data.get("email", ""),
            cleaned_data.get("mobile", ""),
        )
        if error:
            raise forms.ValidationError(error)

        fee_type = cleaned_data.get("fee_type")
        if fee_type == StudentFee.FeeType.EXAM and not cleaned_data.get("semester"):
            raise forms.ValidationError("Semester is required for exam fees.")
        if fee_type == StudentFee.FeeType.TUITION and not cleaned_data.get("amount"):
            raise forms.ValidationError("Please enter a valid amount.")
        return cleaned_data
