from django import forms
from django.contrib.auth.models import User

from .constants import DEPARTMENTS, College, Role
from .validators import is_valid_mobile, validate_register_id


class RegistrationForm(forms.Form):
    """Self-registration for every role; accounts wait for approval"""

    register_id = forms.CharField(max_length=50)
    name = forms.CharField(max_length=150)
    email = forms.EmailField(required=False)
    mobile_number = forms.CharField(max_length=15, required=False)
    father_mobile_number = forms.CharField(max_length=15, required=False)
    role = forms.ChoiceField(choices=Role.choices)
    college = forms.ChoiceField(
        choices=[(c.value, c.label) for c in College if c != College.ALL],
        required=False,
    )
    department = forms.CharField(max_length=10, required=False)
    password1 = forms.CharField(widget=forms.PasswordInput)
    password2 = forms.CharField(widget=forms.PasswordInput)

    def clean_department(self):
        department = (self.cleaned_data.get("department") or "").strip().upper()
        if department and department not in DEPARTMENTS:
            raise forms.ValidationError(f"Unknown department '{department}'.")
        return department

    def clean(self):
        cleaned_data = super().clean()
        role = cleaned_data.get("role")
        college = cleaned_data.get("college") or ""
        department = cleaned_data.get("department") or ""

        if cleaned_data.get("password1") != cleaned_data.get("password2"):
            raise forms.ValidationError("Passwords do not match.")

        if role != Role.CHAIRMAN and not college:
            raise forms.ValidationError("Please select a college.")

        if role in (Role.STUDENT, Role.FACULTY, Role.HOD) and not department:
            raise forms.ValidationError("Please select a department.")

        if role == Role.STUDENT and not cleaned_data.get("father_mobile_number"):
            raise forms.ValidationError("Father's mobile number is required.")

        for field in ("mobile_number", "father_mobile_number"):
            value = cleaned_data.get(field)
            if value and not is_valid_mobile(value):
                raise forms.ValidationError(
                    "Invalid Mobile Number. Must be 10 digits."
                )

        register_id, error = validate_register_id(
            cleaned_data.get("register_id", ""), role, college, department
        )
        if error:
            raise forms.ValidationError(error)
        if User.objects.filter(username=register_id).exists():
            raise forms.ValidationError(f"User ID '{register_id}' already exists.")

        cleaned_data["register_id"] = register_id
        return cleaned_data
