from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, BooleanField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Email, Optional, AnyOf, Regexp
from lifeline.forms.validators import Omittable, Rating, blank_to_none
from lifeline.models.enums import BloodType, Gender, values

DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class DonorRegistrationForm(FlaskForm):
    full_name = StringField('Full Name', validators=[DataRequired(), Length(min=2, max=100)])
    email = StringField('Email', validators=[DataRequired(), Email()])
    phone = StringField('Phone Number', validators=[DataRequired(), Length(min=7, max=20)])
    blood_type = StringField('Blood Type', validators=[DataRequired(), AnyOf(values(BloodType))])
    date_of_birth = StringField('Date of Birth', validators=[
        DataRequired(), Regexp(DATE_PATTERN, message='Date must be in YYYY-MM-DD format')
    ])
    gender = StringField('Gender', validators=[DataRequired(), AnyOf(values(Gender))])
    weight = IntegerField('Weight (kg)', validators=[InputRequired(), NumberRange(min=45, max=300)])
    address = StringField('Address', validators=[DataRequired(), Length(min=5, max=200)])
    latitude = StringField('Latitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])
    longitude = StringField('Longitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])


class DonorUpdateForm(FlaskForm):
    full_name = StringField('Full Name', validators=[Omittable(), DataRequired(), Length(min=2, max=100)])
    email = StringField('Email', validators=[Omittable(), DataRequired(), Email()])
    phone = StringField('Phone Number', validators=[Omittable(), DataRequired(), Length(min=7, max=20)])
    blood_type = StringField('Blood Type', validators=[Omittable(), DataRequired(), AnyOf(values(BloodType))])
    date_of_birth = StringField('Date of Birth', validators=[
        Omittable(), DataRequired(), Regexp(DATE_PATTERN, message='Date must be in YYYY-MM-DD format')
    ])
    gender = StringField('Gender', validators=[Omittable(), DataRequired(), AnyOf(values(Gender))])
    weight = IntegerField('Weight (kg)', validators=[Omittable(), InputRequired(), NumberRange(min=45, max=300)])
    address = StringField('Address', validators=[Omittable(), DataRequired(), Length(min=5, max=200)])
    latitude = StringField('Latitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])
    longitude = StringField('Longitude', validators=[Optional(), Length(max=20)], filters=[blank_to_none])
    # Admin verification and donation bookkeeping
    is_available = BooleanField('Available', validators=[Omittable()])
    is_verified = BooleanField('Verified', validators=[Omittable()])
    total_donations = IntegerField('Total Donations', validators=[Omittable(), InputRequired(), NumberRange(min=0)])
    rating = StringField('Rating', validators=[Omittable(), DataRequired(), Rating()])
    last_donation = StringField('Last Donation', validators=[
        Optional(), Regexp(DATE_PATTERN, message='Date must be in YYYY-MM-DD format')
    ], filters=[blank_to_none])
