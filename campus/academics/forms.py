from django import forms

from base.constants import DEPARTMENTS


class SyllabusUploadForm(forms.Form):
    department = forms.CharField(max_length=10)
    file = forms.FileField()

    def clean_department(self):
        department = self.cleaned_data["department"].strip().upper()
        if department not in DEPARTMENTS:
            raise forms.ValidationError("Unknown department.")
        return department

    def clean_file(self):
        file = self.cleaned_data["file"]
        if not file.name.lower().endswith(".pdf"):
            raise forms.ValidationError("Only PDF files are allowed.")
        return file
