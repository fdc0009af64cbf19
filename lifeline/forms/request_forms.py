from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Email, Optional, AnyOf
from lifeline.forms.validators import Omittable, blank_to_none
from lifeline.models.enums import (
    BloodType, UrgencyLevel, BloodRequestStatus, DonorResponseStatus, LifeSaverStatus, values
)


class BloodRequestForm(FlaskForm):
    patient_name = StringField('Patient Name', validators=[DataRequired(), Length(min=2, max=100)])
    blood_type = StringField('Blood Type', validators=[DataRequired(), AnyOf(values(BloodType))])
    units_required = IntegerField('Units Required', validators=[InputRequired(), NumberRange(min=1, max=20)])
    urgency_level = StringField('Urgency', validators=[DataRequired(), AnyOf(values(UrgencyLevel))])
    hospital = StringField('Hospital', validators=[DataRequired(), Length(max=200)])
    contact_person = StringField('Contact Person', validators=[DataRequired(), Length(max=100)])
    contact_phone = StringField('Contact Phone', validators=[DataRequired(), Length(min=7, max=20)])
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=1000)])
    latitude = StringField('Latitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])
    longitude = StringField('Longitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])


class BloodRequestUpdateForm(FlaskForm):
    status = StringField('Status', validators=[Omittable(), DataRequired(), AnyOf(values(BloodRequestStatus))])
    units_required = IntegerField('Units Required', validators=[Omittable(), InputRequired(), NumberRange(min=1, max=20)])
    urgency_level = StringField('Urgency', validators=[Omittable(), DataRequired(), AnyOf(values(UrgencyLevel))])
    hospital = StringField('Hospital', validators=[Omittable(), DataRequired(), Length(max=200)])
    contact_person = StringField('Contact Person', validators=[Omittable(), DataRequired(), Length(max=100)])
    contact_phone = StringField('Contact Phone', validators=[Omittable(), DataRequired(), Length(min=7, max=20)])
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=1000)])


class DonorResponseForm(FlaskForm):
    request_id = StringField('Blood Request', validators=[DataRequired(), Length(max=64)])
    donor_id = StringField('Donor', validators=[DataRequired(), Length(max=64)])
    status = StringField('Status', validators=[DataRequired(), AnyOf(values(DonorResponseStatus))])


class LifeSaverRequestForm(FlaskForm):
    requester_name = StringField('Your Name', validators=[DataRequired(), Length(min=2, max=100)])
    requester_email = StringField('Your Email', validators=[DataRequired(), Email()])
    requester_phone = StringField('Your Phone', validators=[DataRequired(), Length(min=7, max=20)])
    selected_donor_id = StringField('Donor', validators=[DataRequired(), Length(max=64)])
    blood_type = StringField('Blood Type', validators=[DataRequired(), AnyOf(values(BloodType))])
    units_required = IntegerField('Units Required', validators=[InputRequired(), NumberRange(min=1, max=20)])
    urgency_level = StringField('Urgency', validators=[DataRequired(), AnyOf(values(UrgencyLevel))])
    hospital = StringField('Hospital', validators=[DataRequired(), Length(max=200)])
    request_reason = TextAreaField('Reason', validators=[DataRequired(), Length(max=1000)])
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=1000)])


class LifeSaverUpdateForm(FlaskForm):
    status = StringField('Status', validators=[Omittable(), DataRequired(), AnyOf(values(LifeSaverStatus))])
    requester_name = StringField('Your Name', validators=[Omittable(), DataRequired(), Length(min=2, max=100)])
    requester_email = StringField('Your Email', validators=[Omittable(), DataRequired(), Email()])
    requester_phone = StringField('Your Phone', validators=[Omittable(), DataRequired(), Length(min=7, max=20)])
    units_required = IntegerField('Units Required', validators=[Omittable(), InputRequired(), NumberRange(min=1, max=20)])
    urgency_level = StringField('Urgency', validators=[Omittable(), DataRequired(), AnyOf(values(UrgencyLevel))])
    hospital = StringField('Hospital', validators=[Omittable(), DataRequired(), Length(max=200)])
    request_reason = TextAreaField('Reason', validators=[Omittable(), DataRequired(), Length(max=1000)])
    notes = TextAreaField('Notes', validators=[Optional(), Length(max=1000)])
